from .codec import ValueCodec, decode_document, decode_value, encode_document, encode_value
from .errors import (
    Error, InvalidTaggedValue, NonStringKey, TimestampOutOfRange, UnknownTagKind, UnsupportedValueKind,
)
from .jsonio import dumps_document, loads_document
from .timefmt import format_utc_timestamp, parse_utc_timestamp

__all__ = [
    "ValueCodec",
    "encode_document", "decode_document", "encode_value", "decode_value",
    "dumps_document", "loads_document",
    "format_utc_timestamp", "parse_utc_timestamp",
    "Error", "UnsupportedValueKind", "NonStringKey", "TimestampOutOfRange",
    "UnknownTagKind", "InvalidTaggedValue",
]
