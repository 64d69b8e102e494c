"""
Resolve logical fields from request and sample documents.

Several generations of the request schema are in circulation, so a logical
field may live under its current key, under a legacy alias, or inside the
generic ``additionalProperties`` bag.  Each logical field is described by an
ordered list of accessors; the first one to produce a non-null value wins.

>>> resolve_request_id({"igoRequestId": "1456_T"})
'1456_T'
>>> resolve_request_id({"additionalProperties": {"requestId": "1456_T"}})
'1456_T'
>>> is_cmo_request({"additionalProperties": {"isCmoSample": "TRUE"}})
True
"""
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional
from .json import load_json
from .utils import is_blank, stringify


LOG = logging.getLogger(__name__)

Document = Mapping[str, Any]
Accessor = Callable[[Document], Any]

ADDITIONAL_PROPERTIES = "additionalProperties"


def top_level(key: str) -> Accessor:
    """
    Accessor for *key* at the top level of a document.
    """
    def access(document: Document) -> Any:
        return document.get(key)
    return access


def within(container: str, key: str) -> Accessor:
    """
    Accessor for *key* inside the nested *container* map of a document.
    """
    def access(document: Document) -> Any:
        return nested_fields(document, container).get(key)
    return access


REQUEST_ID_ACCESSORS = [
    top_level("requestId"),
    top_level("igoRequestId"),
    within(ADDITIONAL_PROPERTIES, "requestId"),
    within(ADDITIONAL_PROPERTIES, "igoRequestId"),
]

IS_CMO_ACCESSORS = [
    top_level("isCmoRequest"),
    within(ADDITIONAL_PROPERTIES, "isCmoSample"),
]


def resolve(document: Document, accessors: Iterable[Accessor]) -> Optional[str]:
    """
    Returns the first non-null value produced by *accessors* from
    *document*, as a string.
    """
    for access in accessors:
        value = access(document)

        if value is not None:
            return stringify(value)

    return None


def nested_fields(document: Optional[Document], key: str) -> Dict[str, Any]:
    """
    Returns the nested map under *key* in *document*.

    A missing or non-map value resolves to an empty map, so callers can test
    for keys without checking first.

    >>> nested_fields({"cmoSampleIdFields": {"naToExtract": ""}}, "cmoSampleIdFields")
    {'naToExtract': ''}
    >>> nested_fields({"cmoSampleIdFields": None}, "cmoSampleIdFields")
    {}
    """
    if not document:
        return {}

    value = document.get(key)

    if isinstance(value, Mapping):
        return dict(value)

    if value is not None:
        LOG.debug(f"Ignoring non-map value for «{key}»: {value!r}")

    return {}


def text_field(document: Optional[Document], key: str) -> Optional[str]:
    """
    Returns the value of *key* in *document* as a string, or ``None`` if it
    is missing or null.
    """
    if not document:
        return None
    return stringify(document.get(key))


def first_text_field(document: Optional[Document], *keys: str) -> Optional[str]:
    """
    Returns the value of the first of *keys* which is present and non-null in
    *document*.  An empty string counts as present.

    >>> first_text_field({"specimenType": "", "sampleClass": "PDX"}, "specimenType", "sampleClass")
    ''
    >>> first_text_field({"sampleClass": "PDX"}, "specimenType", "sampleClass")
    'PDX'
    """
    return resolve(document or {}, map(top_level, keys))


def resolve_request_id(document: Document) -> Optional[str]:
    """
    Returns the request id of *document*, or ``None`` if it has none or the
    resolved id is blank.
    """
    request_id = resolve(document, REQUEST_ID_ACCESSORS)

    if is_blank(request_id):
        return None

    return request_id


def is_cmo_request(document: Document) -> bool:
    """
    Returns ``True`` if *document* is flagged as a CMO request.

    Only a case-insensitive ``true`` counts; anything else, including the
    flag being absent, is ``False``.
    """
    flag = resolve(document, IS_CMO_ACCESSORS)

    if is_blank(flag):
        return False

    return flag.strip().lower() == "true"


def load_request(request_json: str) -> Dict[str, Any]:
    """
    Parses raw *request_json* into a request document.

    Raises :exc:`~requestgate.json.JSONDecodeError` if it isn't JSON and
    :exc:`MalformedRequestError` if it isn't a JSON object.

    >>> load_request('["1456_T"]')
    Traceback (most recent call last):
        ...
    requestgate.resolve.MalformedRequestError: request must be a JSON object, not list
    """
    document = load_json(request_json)

    if not isinstance(document, dict):
        raise MalformedRequestError(f"request must be a JSON object, not {type(document).__name__}")

    return document


def get_request_id(request_json: Optional[str]) -> Optional[str]:
    """
    Returns the request id from raw *request_json*, or ``None`` if the JSON
    is blank or has no id.
    """
    if is_blank(request_json):
        return None
    return resolve_request_id(load_request(request_json))


def has_request_id(request_json: Optional[str]) -> bool:
    return get_request_id(request_json) is not None


def is_cmo(request_json: Optional[str]) -> Optional[bool]:
    """
    Returns whether raw *request_json* is a CMO request, or ``None`` if the
    JSON is blank.
    """
    if is_blank(request_json):
        return None
    return is_cmo_request(load_request(request_json))


class MalformedRequestError(ValueError):
    """
    Raised when a request document does not have the shape of a request: it
    is not a JSON object, or its ``samples`` are not an array of objects.
    """
    pass
