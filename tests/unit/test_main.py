from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

import main

TS = "2020-01-01T00:00:00.000+00:00"


def test_run_formats_notices_on_console():
    notices = io.StringIO(
        '{"noticeType": "Info", "timestamp": "%s", "data": {"message": "started"}}\n'
        "not json\n"
        "[]\n" % TS
    )
    out, err = io.StringIO(), io.StringIO()

    assert main.run(notices, out=out, err=err) == 0

    lines = out.getvalue().splitlines()
    assert lines[0] == f'[{TS}] Info: {{"message":"started"}}'
    assert "notice-error.2002: Decoding JSON failed" in lines[1]
    assert len(lines) == 2
    assert err.getvalue().strip() == "notices: 1 formatted, 1 skipped, 1 errors"


def test_run_writes_to_duckdb_when_configured(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    db_path = tmp_path / "out.duckdb"
    monkeypatch.setenv("DIAGNOSTICS_SINK", "duckdb")
    monkeypatch.setenv("DIAGNOSTICS_DB_PATH", str(db_path))

    notices = io.StringIO('{"noticeType": "Info", "timestamp": "%s", "data": {}}\n' % TS)
    out, err = io.StringIO(), io.StringIO()
    assert main.run(notices, out=out, err=err) == 0
    assert out.getvalue() == ""

    from observability import DuckDBDiagnosticSink

    sink = DuckDBDiagnosticSink(path=db_path)
    try:
        assert sink.fetch_messages() == [("diagnostic", TS, "Info: {}")]
    finally:
        sink.close()


def test_main_reads_notices_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = tmp_path / "notices.log"
    path.write_bytes(
        b'{"noticeType": "Info", "timestamp": "2020-01-01T00:00:00.000+00:00", "data": {"n": 1}}\n'
        b'{"noticeType": "Bad\xff"}\n'
    )

    assert main.main(["--notices", str(path)]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines()[0] == f'[{TS}] Info: {{"n":1}}'
    assert "notice-error.2001" in captured.out
    assert "1 formatted, 0 skipped, 1 errors" in captured.err


def test_check_config_prints_compact_encoding(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"SponsorId": "X", "Port": 1}, indent=2), encoding="utf-8")

    assert main.main(["--check-config", str(path)]) == 0

    assert json.loads(capsys.readouterr().out) == {"SponsorId": "X", "Port": 1}


def test_check_config_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert main.main(["--check-config", str(path)]) == 1

    assert capsys.readouterr().err.strip() == "config-error.1000: Unexpected config type: array"


def test_main_reads_stdin_as_bytes_and_survives_bad_utf8(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    raw = (
        b'{"noticeType": "A", "timestamp": "2020-01-01T00:00:00.000+00:00", "data": {"n": 1}}\n'
        b'{"noticeType": "Bad\xff"}\n'
        b'{"noticeType": "B", "timestamp": "2020-01-01T00:00:00.000+00:00", "data": {"n": 2}}\n'
    )
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8"))

    assert main.main([]) == 0

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == f'[{TS}] A: {{"n":1}}'
    assert "notice-error.2001" in lines[1]
    assert lines[2] == f'[{TS}] B: {{"n":2}}'
    assert "2 formatted, 0 skipped, 1 errors" in captured.err
