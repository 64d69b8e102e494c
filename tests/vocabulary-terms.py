import pytest
from requestgate.vocabulary import CmoSampleClass, SampleOrigin, SampleType, SpecimenType


@pytest.mark.parametrize("vocabulary, term", [
    (SpecimenType,   "XenograftDerivedCellLine"),
    (SpecimenType,   "xenograftderivedcellline"),
    (SpecimenType,   "CFDNA"),
    (CmoSampleClass, "ADJACENT_NORMAL"),
    (CmoSampleClass, "adjacent_normal"),
    (SampleOrigin,   "viably_frozen_cells"),
    (SampleType,     "dna_cdna_library"),
    (SampleType,     " DNA "),
])
def test_recognized_terms(vocabulary, term):
    assert vocabulary.is_member(term) is True


@pytest.mark.parametrize("vocabulary, term", [
    (CmoSampleClass, "Adjacent Normal"),
    (CmoSampleClass, "Unknown Tumor"),
    (SampleOrigin,   "Viably Frozen Cells"),
    (SampleOrigin,   "Whole Blood"),
    (SampleType,     "DNA/cDNA Library"),
    (SampleType,     "Pooled Library"),
])
def test_display_values_are_not_members(vocabulary, term):
    assert vocabulary.is_member(term) is False


@pytest.mark.parametrize("term", [None, "", "Spleen", "PDX_", 42, {"sampleType": "DNA"}])
def test_unrecognized_terms_are_not_errors(term):
    for vocabulary in (SpecimenType, CmoSampleClass, SampleOrigin, SampleType):
        assert vocabulary.is_member(term) is False
        assert vocabulary.lookup(term) is None


def test_lookup_returns_the_member():
    assert SpecimenType.lookup("organoid") is SpecimenType.ORGANOID
    assert SampleType.lookup("pooled_library") is SampleType.POOLED_LIBRARY
    assert SampleType.lookup("Pooled Library") is None


def test_matches_accepts_name_or_display_value():
    assert SampleType.POOLED_LIBRARY.matches("Pooled Library") is True
    assert SampleType.POOLED_LIBRARY.matches("pooled_library") is True
    assert SampleType.POOLED_LIBRARY.matches(None) is False
    assert SampleType.POOLED_LIBRARY.matches("DNA Library") is False
