"""
Unit tests for core.logger module.

Tests:
- Logger initialization
- Structured key=value message formatting and escaping
- Secret field redaction in both output modes
- JSON output mode
- StructuredFormatter output
"""

import json
import logging

import pytest

from groupbrotr.core import Logger
from groupbrotr.core.logger import REDACTED, StructuredFormatter, format_kv_pairs, redact


class TestInit:
    """Logger initialization."""

    def test_name(self) -> None:
        logger = Logger("test_cli")
        assert logger._logger.name == "test_cli"

    def test_default_not_json(self) -> None:
        logger = Logger("test")
        assert logger._json_output is False

    def test_json_mode(self) -> None:
        logger = Logger("test", json_output=True)
        assert logger._json_output is True

    def test_default_max_value_length(self) -> None:
        assert Logger("test")._max_value_length == 1000


class TestFormatKvPairs:
    """Key-value pairs formatting and escaping."""

    def test_empty(self) -> None:
        assert format_kv_pairs({}) == ""

    def test_simple(self) -> None:
        assert format_kv_pairs({"kind": 9}) == " kind=9"
        assert format_kv_pairs({"group": "g1"}) == " group=g1"

    def test_with_spaces(self) -> None:
        assert format_kv_pairs({"content": "hello group"}) == ' content="hello group"'

    def test_with_quotes(self) -> None:
        assert format_kv_pairs({"content": 'say "hi"'}) == ' content="say \\"hi\\""'

    def test_empty_value_quoted(self) -> None:
        assert format_kv_pairs({"reason": ""}) == ' reason=""'

    def test_truncation(self) -> None:
        result = format_kv_pairs({"id": "a" * 20}, max_value_length=5)
        assert result == " id=aaaaa...<truncated 15 chars>"

    def test_custom_prefix(self) -> None:
        assert format_kv_pairs({"a": 1, "b": 2}, prefix="") == "a=1 b=2"


class TestRedaction:
    """Secret key material never reaches log output."""

    @pytest.mark.parametrize("field", ["secret", "private_key", "nsec", "Secret_Key"])
    def test_redact_secret_fields(self, field: str) -> None:
        assert redact({field: "deadbeef", "kind": 9}) == {field: REDACTED, "kind": 9}

    def test_format_kv_pairs_redacts(self) -> None:
        assert format_kv_pairs({"nsec": "nsec1abc"}) == f" nsec={REDACTED}"

    def test_logger_redacts_in_kv_mode(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("redact_kv")
        with caplog.at_level(logging.INFO, logger="redact_kv"):
            logger.info("loaded", private_key="67dea2ed")  # pragma: allowlist secret
        assert caplog.records[0].structured_kv == {"private_key": REDACTED}

    def test_logger_redacts_in_json_mode(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("redact_json", json_output=True)
        with caplog.at_level(logging.INFO, logger="redact_json"):
            logger.info("loaded", secret="67dea2ed")  # pragma: allowlist secret
        payload = json.loads(caplog.records[0].getMessage())
        assert payload["secret"] == REDACTED
        assert "67dea2ed" not in caplog.text


class TestLogMethods:
    """Level methods attach structured extras."""

    @pytest.mark.parametrize(
        ("method", "level"),
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_levels(self, caplog: pytest.LogCaptureFixture, method: str, level: int) -> None:
        logger = Logger("levels")
        with caplog.at_level(logging.DEBUG, logger="levels"):
            getattr(logger, method)("event_signed", kind=9)
        record = caplog.records[0]
        assert record.levelno == level
        assert record.getMessage() == "event_signed"
        assert record.structured_kv == {"kind": 9}

    def test_no_kwargs_no_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("plain")
        with caplog.at_level(logging.INFO, logger="plain"):
            logger.info("started")
        assert not hasattr(caplog.records[0], "structured_kv")

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("exc")
        with caplog.at_level(logging.ERROR, logger="exc"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("failed", step="sign")
        assert caplog.records[0].exc_info is not None

    def test_truncates_long_values(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("trunc", max_value_length=4)
        with caplog.at_level(logging.INFO, logger="trunc"):
            logger.info("msg", content="abcdefgh")
        assert caplog.records[0].structured_kv["content"] == "abcd...<truncated 4 chars>"


class TestJsonOutput:
    """JSON output mode."""

    def test_json_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("json_cli", json_output=True)
        with caplog.at_level(logging.INFO, logger="json_cli"):
            logger.info("event_published", kind=9000)
        payload = json.loads(caplog.records[0].getMessage())
        assert payload["level"] == "info"
        assert payload["service"] == "json_cli"
        assert payload["message"] == "event_published"
        assert payload["kind"] == 9000
        assert "timestamp" in payload


class TestStructuredFormatter:
    """Formatter output for Logger and plain stdlib records."""

    def _record(self, msg: str, **extra: object) -> logging.LogRecord:
        record = logging.LogRecord("groupbrotr.nips.nip01", logging.DEBUG, "", 0, msg, (), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_plain_record(self) -> None:
        formatted = StructuredFormatter().format(self._record("event_signed kind=9"))
        assert formatted == "debug groupbrotr.nips.nip01 event_signed kind=9"

    def test_structured_record(self) -> None:
        record = self._record("event_signed", structured_kv={"id": "ab", "content": "a b"})
        formatted = StructuredFormatter().format(record)
        assert formatted == 'debug groupbrotr.nips.nip01 event_signed id=ab content="a b"'
