import pytest
from copy import deepcopy
from requestgate.config import ValidatorConfig
from requestgate.json import as_json
from requestgate.validator import RequestValidator


class RecordingStatusLogger:
    """
    Request status logger which keeps every status it is given.
    """
    def __init__(self):
        self.records = []

    def log_request_status(self, request_json, status):
        self.records.append((request_json, status))

    @property
    def statuses(self):
        return [status for _, status in self.records]


VALID_CMO_SAMPLE = {
    "igoId": "1456_T_1",
    "investigatorSampleId": "01-0012345a",
    "baitSet": "IMPACT505_BAITS",
    "cmoPatientId": "C-8484",
    "specimenType": "Resection",
    "sampleOrigin": "Block",
    "cmoSampleClass": "Primary",
    "cmoSampleIdFields": {
        "naToExtract": "DNA",
        "sampleType": "DNA",
        "normalizedPatientId": "C-8484",
    },
}

VALID_NON_CMO_SAMPLE = {
    "igoId": "1456_T_2",
    "baitSet": "IMPACT505_BAITS",
    "cmoSampleIdFields": {
        "normalizedPatientId": "C-8484",
    },
}


@pytest.fixture
def status_logger():
    return RecordingStatusLogger()


@pytest.fixture
def make_validator(status_logger):
    def make(cmo_request_filter = False):
        return RequestValidator(ValidatorConfig(cmo_request_filter), status_logger)
    return make


@pytest.fixture
def validator(make_validator):
    return make_validator()


@pytest.fixture
def cmo_sample():
    """
    A factory for valid CMO samples, with any overrides applied.  Overrides
    set to ``None`` remove the key.
    """
    def make(**overrides):
        sample = deepcopy(VALID_CMO_SAMPLE)
        for key, value in overrides.items():
            if value is None:
                sample.pop(key, None)
            else:
                sample[key] = value
        return sample
    return make


@pytest.fixture
def non_cmo_sample():
    def make(**overrides):
        sample = deepcopy(VALID_NON_CMO_SAMPLE)
        sample.update(overrides)
        return sample
    return make


@pytest.fixture
def request_json():
    """
    A factory for raw request JSON with the given *samples*.
    """
    def make(samples, request_id = "1456_T", is_cmo = True, **fields):
        document = {}
        if request_id is not None:
            document["requestId"] = request_id
        if is_cmo is not None:
            document["isCmoRequest"] = is_cmo
        document.update(fields)
        document["samples"] = samples
        return as_json(document)
    return make
