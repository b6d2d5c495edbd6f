"""
Tagged-value model for the document wire format.

Every wire value is a one-key dict naming its own type, e.g.
``{"integerValue": 1}`` or ``{"mapValue": {"fields": {...}}}``. The dataclasses
below are the closed set of those kinds; ``from_wire`` is the only way to build
them from untrusted dicts and ``to_wire`` turns them back into plain dicts.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .errors import InvalidTaggedValue, UnknownTagKind

logger = logging.getLogger(__name__)

TAG_NULL      = "nullValue"
TAG_BOOL      = "booleanValue"
TAG_INT       = "integerValue"
TAG_DOUBLE    = "doubleValue"
TAG_STRING    = "stringValue"
TAG_TIMESTAMP = "timestampValue"
TAG_ARRAY     = "arrayValue"
TAG_MAP       = "mapValue"

TAGS = frozenset([
    TAG_NULL, TAG_BOOL, TAG_INT, TAG_DOUBLE,
    TAG_STRING, TAG_TIMESTAMP, TAG_ARRAY, TAG_MAP,
])

# ---- Value model ----
@dataclass(frozen=True)
class TNull: pass
@dataclass(frozen=True)
class TBool: v: Any
@dataclass(frozen=True)
class TInt: v: Any
@dataclass(frozen=True)
class TDouble: v: Any
@dataclass(frozen=True)
class TString: s: Any
@dataclass(frozen=True)
class TTimestamp: raw: Optional[str]
@dataclass(frozen=True)
class TArray: items: Tuple['Tagged', ...]
@dataclass(frozen=True)
class TMap: fields: Tuple[Tuple[str, 'Tagged'], ...]

Tagged = Union[TNull, TBool, TInt, TDouble, TString, TTimestamp, TArray, TMap]


def split_tag(value: Any) -> Tuple[str, Any]:
    """Return ``(tag, payload)`` of a wire value, rejecting anything that is
    not a single-key mapping."""
    if not isinstance(value, Mapping):
        raise InvalidTaggedValue(f"expected a tagged mapping, got {type(value).__name__}")
    if len(value) != 1:
        raise InvalidTaggedValue(f"expected exactly one tag key, got {sorted(map(str, value))}")
    (tag, payload), = value.items()
    return tag, payload


def document_fields(doc: Any) -> Mapping:
    # absent or malformed documents read as empty ones
    if not doc or not isinstance(doc, Mapping):
        if doc:
            logger.debug("ignoring non-mapping document of type %s", type(doc).__name__)
        return {}
    fields = doc.get("fields")
    if not fields or not isinstance(fields, Mapping):
        if fields:
            logger.debug("ignoring non-mapping document fields of type %s", type(fields).__name__)
        return {}
    return fields


def from_wire(value: Any) -> Tagged:
    tag, payload = split_tag(value)
    if tag == TAG_NULL:
        return TNull()
    if tag == TAG_BOOL:
        return TBool(payload)
    if tag == TAG_INT:
        return TInt(payload)
    if tag == TAG_DOUBLE:
        return TDouble(payload)
    if tag == TAG_STRING:
        return TString(payload)
    if tag == TAG_TIMESTAMP:
        return TTimestamp(payload)
    if tag == TAG_ARRAY:
        values = payload.get("values") if isinstance(payload, Mapping) else None
        return TArray(tuple(from_wire(item) for item in values or ()))
    if tag == TAG_MAP:
        return TMap(tuple((k, from_wire(v)) for k, v in document_fields(payload).items()))
    raise UnknownTagKind(tag)


def to_wire(t: Tagged) -> Dict[str, Any]:
    if isinstance(t, TNull):
        return {TAG_NULL: None}
    if isinstance(t, TBool):
        return {TAG_BOOL: t.v}
    if isinstance(t, TInt):
        return {TAG_INT: t.v}
    if isinstance(t, TDouble):
        return {TAG_DOUBLE: t.v}
    if isinstance(t, TString):
        return {TAG_STRING: t.s}
    if isinstance(t, TTimestamp):
        return {TAG_TIMESTAMP: t.raw}
    if isinstance(t, TArray):
        return {TAG_ARRAY: {"values": [to_wire(it) for it in t.items]}}
    if isinstance(t, TMap):
        return {TAG_MAP: document(t.fields)}
    raise TypeError(f"not a tagged value: {type(t).__name__}")


def document(fields) -> Dict[str, Dict[str, Any]]:
    """Build a wire Document from ``(name, Tagged)`` pairs."""
    out: Dict[str, Any] = {}
    for k, v in fields:
        out[k] = to_wire(v)
    return {"fields": out}
