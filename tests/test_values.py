"""Tests for the SharedObject data model."""

import json
import math

from SOPE.SMM.constants import TYPE_UNDEFINED, TYPE_ARRAY, TYPE_BYTE_ARRAY
from SOPE.SDM.values import (
    SharedObject, SORecord, SOValue,
    UNDEFINED, NULL, TRUE, FALSE, integer, double, string, skipped,
)


def _doc(*records):
    so = SharedObject("doc", 3, 99)
    for r in records:
        so.append(r)
    return so


def test_get_first_match():
    so = _doc(SORecord("a", integer(1)), SORecord("a", integer(2)))
    assert so.get("a") == integer(1)


def test_get_missing_never_raises():
    assert _doc().get("anything") is UNDEFINED
    assert UNDEFINED.tag == TYPE_UNDEFINED
    assert UNDEFINED.is_undefined


def test_container_protocol():
    so = _doc(SORecord("x", NULL), SORecord("y", TRUE))
    assert len(so) == 2
    assert "x" in so and "z" not in so
    assert [r.key for r in so] == so.keys() == ["x", "y"]


def test_records_is_read_only_view():
    so = _doc(SORecord("x", NULL))
    assert isinstance(so.records, tuple)


def test_kinds():
    assert TRUE.kind == FALSE.kind == "boolean"
    assert double(1.0).kind == "double"
    assert string("s").kind == "string"
    assert skipped(TYPE_ARRAY).kind == "skipped"
    assert skipped(TYPE_BYTE_ARRAY).type_name == "ByteArray"


def test_str():
    assert str(integer(5)) == "5"
    assert str(string("hi")) == "'hi'"
    assert str(NULL) == "null"
    assert str(TRUE) == "True"
    assert str(skipped(TYPE_ARRAY)) == "<Array skipped>"


def test_to_dict_is_json_ready():
    so = _doc(
        SORecord("n", integer(-3)),
        SORecord("s", string("ok")),
        SORecord("nan", double(math.nan)),
        SORecord("inf", double(-math.inf)),
        SORecord("arr", skipped(TYPE_ARRAY)),
    )
    d = so.to_dict()
    assert d["name"] == "doc"
    assert d["type_marker"] == 3
    assert d["declared_length"] == 99
    assert [r["value"] for r in d["records"]] == [-3, "ok", "NaN", "-Infinity", None]
    assert d["records"][4] == {"key": "arr", "kind": "skipped", "tag": TYPE_ARRAY, "value": None}
    json.dumps(d, allow_nan=False)


def test_value_equality():
    assert SOValue(0x04, 7) == integer(7)
    assert integer(7) != integer(8)
