"""Tests for the sol_inspector CLI."""

import json
import os

import pytest

from SOPE.SMM.constants import TYPE_INT, TYPE_STRING, TYPE_OBJECT
from SOPE.SVM.sol_inspector import main

from sol_fixtures import sol, body, record, inline


@pytest.fixture
def sol_file(tmp_path):
    path = tmp_path / "saved_data.sol"
    path.write_bytes(sol(body(
        record(inline("int_param"), TYPE_INT, b"\x2a"),
        record(inline("name"), TYPE_STRING, inline("ann")),
        record(inline("blob"), TYPE_OBJECT, b"\x0b\x01"),
    ), name="saved_data"))
    return path


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_report_pass(sol_file, capsys):
    assert _run([str(sol_file), "--get", "int_param", "--get", "missing"]) == 0
    out = capsys.readouterr().out
    assert "SO name   : 'saved_data'" in out
    assert "Parameter int_param: 42" in out
    assert "Parameter missing: undefined" in out
    assert "skipped" in out
    assert "VERDICT: PASS" in out


def test_trace(sol_file, capsys):
    assert _run([str(sol_file), "--trace"]) == 0
    out = capsys.readouterr().out
    assert "Decode Trace" in out
    assert "int_param (inline: True)" in out
    assert "'ann' (3)" in out


def test_json_output(sol_file, capsys):
    assert _run([str(sol_file), "--json"]) == 0
    d = json.loads(capsys.readouterr().out)
    assert d["name"] == "saved_data"
    assert [r["key"] for r in d["records"]] == ["int_param", "name", "blob"]


def test_missing_file(tmp_path, capsys):
    assert _run([str(tmp_path / "absent.sol")]) == 1
    out = capsys.readouterr().out
    assert "FileUnavailable" in out
    assert "VERDICT: FAIL" in out


def test_decode_error_line_names_offset(tmp_path, capsys):
    path = tmp_path / "bad.sol"
    path.write_bytes(sol(record(inline("x"), 0xFF)))
    assert _run([str(path)]) == 1
    out = capsys.readouterr().out
    assert "[!!] UnknownType at offset 24: unknown type tag 0xFF\n" in out
    assert "VERDICT: FAIL" in out


def test_decode_error_json(tmp_path, capsys):
    path = tmp_path / "bad.sol"
    path.write_bytes(sol(record(inline("x"), 0xFF)))
    assert _run([str(path), "--json"]) == 1
    d = json.loads(capsys.readouterr().out)
    assert d["kind"] == "UnknownType"
    assert d["offset"] == 24


def test_app_id_lookup(tmp_path, sol_file, capsys):
    store = tmp_path / "root" / "app" / "app" / "Local Store" / "#SharedObjects"
    os.makedirs(store)
    (store / "saved_data.sol").write_bytes(sol_file.read_bytes())
    assert _run(["--app-id", "app", "--root", str(tmp_path / "root"), "--get", "int_param"]) == 0
    assert "Parameter int_param: 42" in capsys.readouterr().out


def test_requires_a_source():
    assert _run([]) == 2


def test_path_and_app_id_conflict(sol_file):
    assert _run([str(sol_file), "--app-id", "app"]) == 2
