"""
Structured values <-> tagged document values.

    >>> encode_document({"a": {"b": 1}})
    {'fields': {'a': {'mapValue': {'fields': {'b': {'integerValue': 1}}}}}}
    >>> decode_document({"fields": {"n": {"doubleValue": 5.5}}})
    {'n': 5.5}
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date
from typing import Any, Dict

from .errors import NonStringKey, TimestampOutOfRange, UnsupportedValueKind
from .tagged import (
    TArray, TBool, TDouble, TInt, TMap, TNull, TString, TTimestamp, Tagged,
    document, document_fields, from_wire, to_wire,
)
from .timefmt import Formatter, format_utc_timestamp, parse_utc_timestamp, to_utc


INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1


def is_integral(n) -> bool:
    """Python ints always are; floats only when whole and inside int64."""
    if isinstance(n, int):
        return True
    return math.isfinite(n) and float(n).is_integer() and INT64_MIN <= n <= INT64_MAX


class ValueCodec:
    """Stateless encoder/decoder; the only knob is the timestamp formatter."""

    def __init__(self, formatter: Formatter = format_utc_timestamp):
        self.formatter = formatter

    # ---- encode ----
    def encode_document(self, fields: Mapping) -> Dict[str, Any]:
        return document(self._wrap_fields(fields))

    def encode_value(self, v: Any) -> Dict[str, Any]:
        return to_wire(self._wrap(v))

    def _wrap_fields(self, fields: Any):
        if not isinstance(fields, Mapping):
            raise UnsupportedValueKind(
                f"document fields must be a mapping, got {type(fields).__name__}")
        pairs = []
        for k, v in fields.items():
            if not isinstance(k, str):
                raise NonStringKey(k)
            pairs.append((k, self._wrap(v)))
        return tuple(pairs)

    def _wrap(self, v: Any) -> Tagged:
        if v is None:
            return TNull()
        # bool before int: bool is an int subclass
        if isinstance(v, bool):
            return TBool(v)
        if isinstance(v, str):
            return TString(v)
        if isinstance(v, (int, float)):
            if not is_integral(v):
                return TDouble(v)
            return TInt(int(v))
        # date check covers datetime, which subclasses it
        if isinstance(v, date):
            try:
                utc = to_utc(v)
            except OverflowError as e:
                raise TimestampOutOfRange(f"{v!r} is outside the UTC range") from e
            return TTimestamp(self.formatter(utc))
        if isinstance(v, (list, tuple)):
            return TArray(tuple(self._wrap(it) for it in v))
        if isinstance(v, Mapping):
            return TMap(self._wrap_fields(v))
        raise UnsupportedValueKind(f"unsupported type: {type(v).__name__}")

    # ---- decode ----
    def decode_document(self, doc: Any) -> Dict[str, Any]:
        return {k: self.decode_value(v) for k, v in document_fields(doc).items()}

    def decode_value(self, tv: Any) -> Any:
        return self._unwrap(from_wire(tv))

    def _unwrap(self, t: Tagged) -> Any:
        if isinstance(t, TNull):
            return None
        if isinstance(t, (TBool, TInt, TDouble)):
            return t.v
        if isinstance(t, TString):
            return t.s
        if isinstance(t, TTimestamp):
            return parse_utc_timestamp(t.raw)
        if isinstance(t, TArray):
            return [self._unwrap(it) for it in t.items]
        if isinstance(t, TMap):
            return {k: self._unwrap(v) for k, v in t.fields}
        raise TypeError(f"not a tagged value: {type(t).__name__}")


_default = ValueCodec()

encode_document = _default.encode_document
decode_document = _default.decode_document
encode_value = _default.encode_value
decode_value = _default.decode_value
