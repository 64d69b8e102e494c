"""
Sample rule sets.

Samples from CMO requests must carry every field needed to generate a CMO
sample label:

* investigator sample id
* bait set
* CMO patient id
* a specimen type, or a valid alternative to fall back on
* a sample type, or a nucleic acid to extract
* a normalized patient id

Samples from non-CMO requests only need a bait set and a normalized patient
id.

The specimen type fallbacks are laid out as a decision table: the specimen
type (or its ``sampleClass`` alias) is classified into a
:class:`SpecimenTypeDisposition`, and :data:`SPECIMEN_TYPE_CHECKS` maps each
disposition to the check which decides the sample.
"""
import enum
import logging
from typing import Any, Callable, Dict, Mapping, Optional
from .resolve import first_text_field, nested_fields, text_field
from .utils import is_blank
from .vocabulary import CmoSampleClass, SampleOrigin, SampleType, SpecimenType


LOG = logging.getLogger(__name__)

Sample = Mapping[str, Any]

CMO_SAMPLE_ID_FIELDS = "cmoSampleIdFields"

# Specimen types which must also carry a CMO sample class.
SPECIMEN_TYPES_NEEDING_SAMPLE_CLASS = {
    SpecimenType.CELLLINE,
    SpecimenType.PDX,
    SpecimenType.XENOGRAFT,
    SpecimenType.XENOGRAFTDERIVEDCELLLINE,
    SpecimenType.ORGANOID,
}

# Specimen types which must also carry a sample origin.
SPECIMEN_TYPES_NEEDING_SAMPLE_ORIGIN = {
    SpecimenType.EXOSOME,
    SpecimenType.CFDNA,
}


def is_valid_cmo_sample(sample: Optional[Sample], has_request_id: bool) -> bool:
    """
    Returns ``True`` if *sample*, from a CMO request, has all the fields
    required for CMO label generation.

    A sample is never valid if its request has no id, as indicated by
    *has_request_id*.

    >>> is_valid_cmo_sample({}, True)
    False
    >>> is_valid_cmo_sample({"investigatorSampleId": "P-1", "baitSet": "IMPACT505",
    ...                      "cmoPatientId": "C-8484", "specimenType": "Biopsy",
    ...                      "cmoSampleIdFields": {"sampleType": "DNA", "normalizedPatientId": "C-8484"}},
    ...                     True)
    True
    """
    if not sample:
        return False

    return (has_request_id
        and has_investigator_sample_id(sample)
        and has_bait_set(sample)
        and has_cmo_patient_id(sample)
        and has_valid_specimen_type(sample)
        and has_sample_type(sample)
        and has_normalized_patient_id(sample))


def is_valid_non_cmo_sample(sample: Optional[Sample]) -> bool:
    """
    Returns ``True`` if *sample*, from a non-CMO request, has a bait set and a
    normalized patient id.

    >>> is_valid_non_cmo_sample({"baitSet": "IMPACT505",
    ...                          "cmoSampleIdFields": {"normalizedPatientId": "C-8484"}})
    True
    >>> is_valid_non_cmo_sample(None)
    False
    """
    if not sample:
        return False

    return has_bait_set(sample) and has_normalized_patient_id(sample)


def has_bait_set(sample: Sample) -> bool:
    return not is_blank(text_field(sample, "baitSet"))


def has_investigator_sample_id(sample: Sample) -> bool:
    return not is_blank(text_field(sample, "investigatorSampleId"))


def has_cmo_patient_id(sample: Sample) -> bool:
    return not is_blank(text_field(sample, "cmoPatientId"))


@enum.unique
class SpecimenTypeDisposition(enum.Enum):
    """
    What a resolved specimen type means for the rest of the check.
    """
    UNRECOGNIZED        = "unrecognized"
    NEEDS_SAMPLE_CLASS  = "needs sample class"
    NEEDS_SAMPLE_ORIGIN = "needs sample origin"
    SUFFICIENT          = "sufficient"


def classify_specimen_type(specimen_type: Optional[str]) -> SpecimenTypeDisposition:
    """
    Classifies a resolved *specimen_type* value.

    >>> classify_specimen_type(None)
    <SpecimenTypeDisposition.UNRECOGNIZED: 'unrecognized'>
    >>> classify_specimen_type("pdx")
    <SpecimenTypeDisposition.NEEDS_SAMPLE_CLASS: 'needs sample class'>
    >>> classify_specimen_type("cfDNA")
    <SpecimenTypeDisposition.NEEDS_SAMPLE_ORIGIN: 'needs sample origin'>
    >>> classify_specimen_type("Resection")
    <SpecimenTypeDisposition.SUFFICIENT: 'sufficient'>
    """
    if is_blank(specimen_type):
        return SpecimenTypeDisposition.UNRECOGNIZED

    member = SpecimenType.lookup(specimen_type)

    if member is None:
        return SpecimenTypeDisposition.UNRECOGNIZED

    if member in SPECIMEN_TYPES_NEEDING_SAMPLE_CLASS:
        return SpecimenTypeDisposition.NEEDS_SAMPLE_CLASS

    if member in SPECIMEN_TYPES_NEEDING_SAMPLE_ORIGIN:
        return SpecimenTypeDisposition.NEEDS_SAMPLE_ORIGIN

    return SpecimenTypeDisposition.SUFFICIENT


def has_cmo_sample_class(sample: Sample) -> bool:
    """
    Returns ``True`` if *sample* has a recognized CMO sample class, read from
    ``cmoSampleClass`` or, if that is absent, ``sampleType``.
    """
    cmo_sample_class = first_text_field(sample, "cmoSampleClass", "sampleType")

    return not is_blank(cmo_sample_class) and CmoSampleClass.is_member(cmo_sample_class)


def has_sample_origin(sample: Sample) -> bool:
    sample_origin = text_field(sample, "sampleOrigin")

    return not is_blank(sample_origin) and SampleOrigin.is_member(sample_origin)


SPECIMEN_TYPE_CHECKS: Dict[SpecimenTypeDisposition, Callable[[Sample], bool]] = {
    SpecimenTypeDisposition.UNRECOGNIZED:        has_cmo_sample_class,
    SpecimenTypeDisposition.NEEDS_SAMPLE_CLASS:  has_cmo_sample_class,
    SpecimenTypeDisposition.NEEDS_SAMPLE_ORIGIN: has_sample_origin,
    SpecimenTypeDisposition.SUFFICIENT:          lambda sample: True,
}


def has_valid_specimen_type(sample: Sample) -> bool:
    """
    Returns ``True`` if *sample* has a valid specimen type, or a valid
    alternative to fall back on.

    The specimen type is read from ``specimenType`` or, if that is absent,
    ``sampleClass``.
    """
    specimen_type = first_text_field(sample, "specimenType", "sampleClass")
    disposition = classify_specimen_type(specimen_type)

    LOG.debug(f"Specimen type «{specimen_type}» is {disposition.value}")

    return SPECIMEN_TYPE_CHECKS[disposition](sample)


def has_sample_type(sample: Sample) -> bool:
    """
    Returns ``True`` if *sample* has a usable sample type in its
    ``cmoSampleIdFields``.

    Any of these will do:

    * no sample type, but a ``naToExtract`` key (an empty value means DNA)
    * a pooled library sample type along with a bait set
    * a recognized sample type
    """
    sample_type = text_field(nested_fields(sample, CMO_SAMPLE_ID_FIELDS), "sampleType")

    return ((is_blank(sample_type) and has_na_to_extract(sample))
        or (SampleType.POOLED_LIBRARY.matches(sample_type) and has_bait_set(sample))
        or SampleType.is_member(sample_type))


def has_na_to_extract(sample: Sample) -> bool:
    """
    Returns ``True`` if the ``naToExtract`` key is present in *sample*'s
    ``cmoSampleIdFields``, whatever its value.
    """
    return "naToExtract" in nested_fields(sample, CMO_SAMPLE_ID_FIELDS)


def has_normalized_patient_id(sample: Sample) -> bool:
    """
    Returns ``True`` if the ``normalizedPatientId`` key is present in
    *sample*'s ``cmoSampleIdFields``, whatever its value.
    """
    return "normalizedPatientId" in nested_fields(sample, CMO_SAMPLE_ID_FIELDS)
