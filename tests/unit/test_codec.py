from collections import OrderedDict
from datetime import date, datetime, timedelta, timezone

import pytest

from fsvalue import (
    NonStringKey, TimestampOutOfRange, UnknownTagKind, UnsupportedValueKind, ValueCodec,
    decode_document, decode_value, encode_document, encode_value,
)

def test_integer_double_split_is_value_based():
    assert encode_value(5) == {"integerValue": 5}
    assert encode_value(5.5) == {"doubleValue": 5.5}
    assert encode_value(5.0) == {"integerValue": 5}
    assert type(encode_value(5.0)["integerValue"]) is int

def test_non_finite_floats_are_doubles():
    assert encode_value(float("inf")) == {"doubleValue": float("inf")}
    nan = encode_value(float("nan"))["doubleValue"]
    assert nan != nan

def test_bool_is_not_an_integer():
    assert encode_value(True) == {"booleanValue": True}
    assert encode_value(False) == {"booleanValue": False}

def test_null_both_ways():
    assert encode_value(None) == {"nullValue": None}
    assert decode_value({"nullValue": None}) is None

def test_array_both_ways():
    wire = {"arrayValue": {"values": [
        {"integerValue": 1}, {"stringValue": "a"}, {"booleanValue": True}, {"nullValue": None},
    ]}}
    assert encode_value([1, "a", True, None]) == wire
    assert decode_value(wire) == [1, "a", True, None]

def test_tuple_encodes_as_array():
    assert encode_value(("x", 2)) == {"arrayValue": {"values": [{"stringValue": "x"}, {"integerValue": 2}]}}

def test_nested_object():
    assert encode_document({"a": {"b": 1}}) == {
        "fields": {"a": {"mapValue": {"fields": {"b": {"integerValue": 1}}}}}
    }

def test_any_mapping_encodes_as_map():
    doc = encode_document(OrderedDict([("k", "v")]))
    assert doc == {"fields": {"k": {"stringValue": "v"}}}

def test_timestamp_both_ways():
    dt = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert encode_value(dt) == {"timestampValue": "2020-01-02T03:04:05Z"}
    assert decode_value({"timestampValue": "2020-01-02T03:04:05Z"}) == dt

def test_timestamp_truncates_to_seconds():
    dt = datetime(2020, 1, 2, 3, 4, 5, 999999)
    assert encode_value(dt) == {"timestampValue": "2020-01-02T03:04:05Z"}

def test_aware_timestamp_is_converted_to_utc():
    plus2 = timezone(timedelta(hours=2))
    dt = datetime(2020, 1, 2, 5, 4, 5, tzinfo=plus2)
    assert encode_value(dt) == {"timestampValue": "2020-01-02T03:04:05Z"}

def test_plain_date_is_midnight_utc():
    assert encode_value(date(2021, 6, 30)) == {"timestampValue": "2021-06-30T00:00:00Z"}

def test_null_or_bad_timestamp_decodes_to_none():
    assert decode_value({"timestampValue": None}) is None
    assert decode_value({"timestampValue": "not a date"}) is None
    assert decode_value({"timestampValue": "2020-13-40T00:00:00Z"}) is None

def test_scalar_payloads_are_returned_as_is():
    assert decode_value({"stringValue": "s"}) == "s"
    assert decode_value({"booleanValue": False}) is False
    assert decode_value({"integerValue": "42"}) == "42"
    assert decode_value({"doubleValue": 1.25}) == 1.25

def test_array_without_values_is_empty():
    assert decode_value({"arrayValue": {}}) == []
    assert decode_value({"arrayValue": None}) == []
    assert decode_value({"arrayValue": {"values": None}}) == []

def test_empty_map_payload():
    assert decode_value({"mapValue": {}}) == {}
    assert decode_value({"mapValue": None}) == {}

def test_absent_document_is_empty():
    assert decode_document(None) == {}
    assert decode_document({}) == {}
    assert decode_document({"fields": None}) == {}
    assert decode_document({"name": "projects/p/databases/d/documents/c/x"}) == {}

def test_malformed_document_is_empty():
    assert decode_document("nope") == {}
    assert decode_document({"fields": ["x"]}) == {}

def test_unsupported_kind_raises():
    with pytest.raises(UnsupportedValueKind):
        encode_value(b"raw")
    with pytest.raises(UnsupportedValueKind):
        encode_document({"f": object()})
    with pytest.raises(UnsupportedValueKind):
        encode_document({"s": {1, 2}})
    # still a TypeError for callers that only know the builtin
    with pytest.raises(TypeError):
        encode_value(lambda: None)

def test_non_mapping_document_raises():
    with pytest.raises(UnsupportedValueKind):
        encode_document(None)
    with pytest.raises(UnsupportedValueKind):
        encode_document([1, 2])

def test_non_string_key_raises():
    with pytest.raises(NonStringKey):
        encode_document({1: "x"})
    with pytest.raises(NonStringKey):
        encode_value({"ok": {2: "x"}})

def test_unknown_tag_raises():
    with pytest.raises(UnknownTagKind):
        decode_value({"bytesValue": "AAEC"})
    with pytest.raises(UnknownTagKind):
        decode_document({"fields": {"r": {"referenceValue": "projects/p"}}})

def test_encode_builds_fresh_tree():
    inner = {"b": [1, 2]}
    fields = {"a": inner}
    doc = encode_document(fields)
    doc["fields"]["a"]["mapValue"]["fields"]["b"]["arrayValue"]["values"].append({"integerValue": 3})
    assert inner == {"b": [1, 2]}
    assert encode_document(fields) != doc

def test_decode_builds_fresh_tree():
    doc = {"fields": {"xs": {"arrayValue": {"values": [{"integerValue": 1}]}}}}
    out = decode_document(doc)
    out["xs"].append(2)
    assert doc["fields"]["xs"]["arrayValue"]["values"] == [{"integerValue": 1}]

def test_custom_formatter_gets_utc_datetimes():
    seen = []
    def fmt(dt):
        seen.append(dt)
        return "stamp"
    codec = ValueCodec(formatter=fmt)
    local = datetime(2020, 1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    assert codec.encode_value(local) == {"timestampValue": "stamp"}
    assert seen == [datetime(2020, 1, 1, 0, 0, 0, tzinfo=timezone.utc)]
    assert seen[0].utcoffset() == timedelta(0)

def test_whole_floats_outside_int64_stay_doubles():
    assert encode_value(1e30) == {"doubleValue": 1e30}
    assert encode_value(-2.0**63) == {"integerValue": -(1 << 63)}
    assert encode_value(2.0**63) == {"doubleValue": 2.0**63}
    # python ints are never demoted
    assert encode_value(10**30) == {"integerValue": 10**30}

def test_timestamp_outside_utc_range_raises():
    early = datetime(1, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=1)))
    with pytest.raises(TimestampOutOfRange):
        encode_value(early)
    with pytest.raises(OverflowError):
        encode_document({"at": early})
