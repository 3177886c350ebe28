"""Unit tests for structured logging."""

import json
import logging

import pytest

from vidtube.core.logger import (
    MAX_REQUEST_ID_LENGTH,
    JSONFormatter,
    RequestIdFilter,
    ensure_request_id,
    is_sensitive_key,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("vidtube.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_context_extras_are_rendered(self):
        payload = json.loads(JSONFormatter().format(_record(account_id=7, channel_id=9)))

        assert payload["message"] == "hello x"
        assert payload["level"] == "INFO"
        assert payload["account_id"] == 7
        assert payload["channel_id"] == 9
        assert "args" not in payload and "msg" not in payload

    @pytest.mark.parametrize(
        "key", ["refresh_token", "accessToken", "password", "old_password", "secret", "Cookie"]
    )
    def test_credential_extras_are_dropped(self, key):
        payload = json.loads(JSONFormatter().format(_record(**{key: "leak", "account_id": 1})))

        assert key not in payload
        assert "leak" not in json.dumps(payload)
        assert payload["account_id"] == 1

    def test_request_id_outside_request_is_null(self):
        record = _record()
        RequestIdFilter().filter(record)

        assert json.loads(JSONFormatter().format(record))["request_id"] is None

    def test_sensitive_key_matching(self):
        assert is_sensitive_key("REFRESH_TOKEN_SECRET")
        assert not is_sensitive_key("username")


class TestRequestId:
    def test_header_is_reused_within_request(self, app):
        with app.test_request_context(headers={"X-Correlation-ID": "corr-1"}):
            assert ensure_request_id() == "corr-1"
            assert ensure_request_id() == "corr-1"

    def test_generated_once_per_request(self, app):
        with app.test_request_context():
            assert ensure_request_id() == ensure_request_id()

    def test_each_request_gets_its_own_id(self, app):
        with app.test_request_context():
            first = ensure_request_id()
        with app.test_request_context():
            second = ensure_request_id()

        assert first != second

    def test_oversized_header_is_truncated(self, app):
        with app.test_request_context(headers={"X-Request-ID": "r" * 500}):
            assert ensure_request_id() == "r" * MAX_REQUEST_ID_LENGTH
