from __future__ import annotations

import json

import pytest

from diagnostics.errors import (
    TRUNCATION_MARKER,
    ConfigErrorCode,
    ErrorDomain,
    ErrorRecord,
    NoticeErrorCode,
    describe_error,
)


def test_code_ranges_do_not_overlap():
    config_codes = {int(c) for c in ConfigErrorCode}
    notice_codes = {int(c) for c in NoticeErrorCode}
    assert config_codes.isdisjoint(notice_codes)
    assert len(notice_codes) == 5
    assert len(config_codes) == 2


def test_factories_set_domain_and_code():
    cfg = ErrorRecord.config(ConfigErrorCode.DECODE_FAILED, "bad")
    notice = ErrorRecord.notice(NoticeErrorCode.DATA_MISSING, "gone")

    assert cfg.domain == ErrorDomain.CONFIG.value == "config-error"
    assert cfg.code == 1000
    assert notice.domain == "notice-error"
    assert notice.code == NoticeErrorCode.DATA_MISSING
    assert notice.underlying is None


def test_describe_single_error():
    err = ErrorRecord.notice(NoticeErrorCode.DATA_MISSING, "Timestamp missing")
    assert err.describe() == "notice-error.2004: Timestamp missing"


def test_describe_two_level_chain_outer_then_inner():
    inner = ErrorRecord(domain="json.decoder.JSONDecodeError", code=0, message="Expecting value")
    outer = ErrorRecord.notice(NoticeErrorCode.DECODE_JSON_FAILED, "Decoding JSON failed", inner)

    text = describe_error(outer)

    assert text == "notice-error.2002: Decoding JSON failed json.decoder.JSONDecodeError.0: Expecting value"
    assert text.index("notice-error.2002") < text.index("json.decoder.JSONDecodeError.0")


def test_describe_truncates_long_chains():
    err: ErrorRecord | None = None
    for i in range(40):
        err = ErrorRecord.config(ConfigErrorCode.DECODE_FAILED, f"level {i}", err)
    assert err is not None

    text = describe_error(err, max_depth=32)

    assert text.endswith(TRUNCATION_MARKER)
    assert text.count("config-error.1000:") == 32
    assert "level 39" in text
    assert "level 8 " in text
    assert "level 7 " not in text


def test_describe_chain_at_exact_depth_is_not_truncated():
    err = ErrorRecord.config(ConfigErrorCode.ENCODE_FAILED, "outer", ErrorRecord.config(ConfigErrorCode.ENCODE_FAILED, "inner"))
    assert TRUNCATION_MARKER not in describe_error(err, max_depth=2)
    assert describe_error(err, max_depth=1) == f"config-error.1001: outer {TRUNCATION_MARKER}"


def test_describe_rejects_non_positive_depth():
    with pytest.raises(ValueError):
        describe_error(ErrorRecord.config(ConfigErrorCode.DECODE_FAILED, "x"), max_depth=0)


def test_from_exception_uses_qualified_type_name():
    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{not json")

    record = ErrorRecord.from_exception(info.value)

    assert record.domain == "json.decoder.JSONDecodeError"
    assert record.code == 0
    assert "Expecting property name" in record.message


def test_from_exception_follows_explicit_causes():
    try:
        try:
            raise KeyError("inner")
        except KeyError as exc:
            raise RuntimeError("outer") from exc
    except RuntimeError as exc:
        record = ErrorRecord.from_exception(exc)

    assert [r.domain for r in record.causes()] == ["builtins.RuntimeError", "builtins.KeyError"]
    assert record.describe() == "builtins.RuntimeError.0: outer builtins.KeyError.0: 'inner'"


def test_from_exception_keeps_errno():
    record = ErrorRecord.from_exception(FileNotFoundError(2, "No such file"))
    assert record.code == 2


def test_records_are_frozen():
    err = ErrorRecord.notice(NoticeErrorCode.DATA_MISSING, "x")
    with pytest.raises(ValueError):
        err.message = "y"  # type: ignore[misc]
