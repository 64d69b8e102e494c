"""
Controlled vocabularies for sample metadata.

Each vocabulary is a closed set of terms.  A term belongs to a vocabulary if
it matches, ignoring case, one of the vocabulary's constant names (e.g.
``CELLLINE`` or ``POOLED_LIBRARY``).  Display values (e.g. ``Pooled
Library``) are not members; they only count when a term is compared against
one particular member with :meth:`ControlledVocabulary.matches`.  An
unrecognized term is a negative answer, never an error.

>>> SpecimenType.is_member("cellline")
True
>>> SampleType.is_member("pooled_library")
True
>>> SampleType.is_member("Pooled Library")
False
>>> CmoSampleClass.is_member(None)
False
"""
import enum
from typing import Optional


class ControlledVocabulary(enum.Enum):
    """
    Base class for vocabularies with case-insensitive membership tests.
    """

    @classmethod
    def lookup(cls, term: Optional[str]) -> Optional["ControlledVocabulary"]:
        """
        Returns the member whose constant name is *term*, ignoring case, or
        ``None``.

        >>> SampleOrigin.lookup("whole_blood")
        <SampleOrigin.WHOLE_BLOOD: 'Whole Blood'>
        >>> SampleOrigin.lookup("Whole Blood")
        """
        if not isinstance(term, str):
            return None

        folded = term.strip().casefold()

        for member in cls:
            if folded == member.name.casefold():
                return member

        return None

    @classmethod
    def is_member(cls, term: Optional[str]) -> bool:
        return cls.lookup(term) is not None

    def matches(self, term: Optional[str]) -> bool:
        """
        Returns ``True`` if *term* names this particular member by either its
        constant name or its display value, ignoring case.

        >>> SampleType.POOLED_LIBRARY.matches("POOLED_LIBRARY")
        True
        >>> SampleType.POOLED_LIBRARY.matches("pooled library")
        True
        >>> SampleType.POOLED_LIBRARY.matches("DNA")
        False
        """
        if not isinstance(term, str):
            return False

        return term.strip().casefold() in (self.name.casefold(), self.value.casefold())


@enum.unique
class SpecimenType(ControlledVocabulary):
    BIOPSY                   = "Biopsy"
    BLOOD                    = "Blood"
    CELLLINE                 = "CellLine"
    CFDNA                    = "cfDNA"
    EXOSOME                  = "Exosome"
    FINGERNAILS              = "Fingernails"
    NONPDX                   = "nonPDX"
    ORGANOID                 = "Organoid"
    OTHER                    = "Other"
    PDX                      = "PDX"
    RAPIDAUTOPSY             = "RapidAutopsy"
    RESECTION                = "Resection"
    SALIVA                   = "Saliva"
    XENOGRAFT                = "Xenograft"
    XENOGRAFTDERIVEDCELLLINE = "XenograftDerivedCellLine"


@enum.unique
class CmoSampleClass(ControlledVocabulary):
    ADJACENT_NORMAL   = "Adjacent Normal"
    ADJACENT_TISSUE   = "Adjacent Tissue"
    CELL_FREE         = "Cell Free"
    LOCAL_RECURRENCE  = "Local Recurrence"
    METASTASIS        = "Metastasis"
    NORMAL            = "Normal"
    PRIMARY           = "Primary"
    RECURRENCE        = "Recurrence"
    TUMOR             = "Tumor"
    UNKNOWN_TUMOR     = "Unknown Tumor"


@enum.unique
class SampleOrigin(ControlledVocabulary):
    BLOCK               = "Block"
    BUFFY_COAT          = "Buffy Coat"
    CELL_PELLET         = "Cell Pellet"
    CELLS               = "Cells"
    CURLS               = "Curls"
    FFPE                = "FFPE"
    FINGERNAILS         = "Fingernails"
    PLASMA              = "Plasma"
    RAPID_AUTOPSY       = "Rapid Autopsy"
    SALIVA              = "Saliva"
    SLIDES              = "Slides"
    SORTED_CELLS        = "Sorted Cells"
    TISSUE              = "Tissue"
    URINE               = "Urine"
    VIABLY_FROZEN_CELLS = "Viably Frozen Cells"
    WHOLE_BLOOD         = "Whole Blood"
    WHOLE_BLOOD_PLASMA  = "Whole Blood Plasma"
    WHOLE_EXOSOME       = "Whole Exosome"


@enum.unique
class SampleType(ControlledVocabulary):
    BLOCKS_SLIDES         = "Blocks/Slides"
    BLOOD                 = "Blood"
    BUFFY_COAT            = "Buffy Coat"
    CDNA                  = "cDNA"
    CDNA_LIBRARY          = "cDNA Library"
    CELLS                 = "Cells"
    CFDNA                 = "cfDNA"
    DNA                   = "DNA"
    DNA_CDNA_LIBRARY      = "DNA/cDNA Library"
    DNA_LIBRARY           = "DNA Library"
    FFPE_CURLS            = "FFPE Curls"
    FFPE_SLIDES           = "FFPE Slides"
    HMW_DNA               = "HMW DNA"
    NUCLEI                = "Nuclei"
    PLASMA                = "Plasma"
    POOLED_LIBRARY        = "Pooled Library"
    RNA                   = "RNA"
    RNA_LIBRARY           = "RNA Library"
    TISSUE                = "Tissue"
    UNKNOWN               = "Unknown"
