import json
import logging
from uuid import UUID

from fastapi.testclient import TestClient

from attest.main import app
from attest.observability import (
    JsonFormatter,
    RequestIdFilter,
    configure_logging,
    reset_request_id,
    sanitize_for_logging,
    set_request_id,
)


def test_request_id_header_is_generated_when_missing() -> None:
    with TestClient(app) as client:
        response = client.get("/health")
    assert response.status_code == 200
    request_id = response.headers.get("X-Request-ID")
    assert request_id is not None
    UUID(request_id)


def test_request_id_header_is_preserved_when_provided() -> None:
    with TestClient(app) as client:
        response = client.post(
            "/documents/validate",
            json={"type": "affidavit", "jurisdiction": "federal"},
            headers={"X-Request-ID": "declaration-request-123"},
        )
    assert response.status_code == 200
    assert response.headers.get("X-Request-ID") == "declaration-request-123"


def test_malformed_request_id_is_replaced() -> None:
    with TestClient(app) as client:
        response = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    UUID(response.headers["X-Request-ID"])


def test_request_started_log_redacts_sensitive_query_values(caplog) -> None:
    with TestClient(app) as client:
        with caplog.at_level(logging.INFO, logger="attest.api"):
            response = client.get("/health?token=supersecret&email=user@example.org&q=public")
    assert response.status_code == 200

    request_started_logs = [
        record for record in caplog.records if getattr(record, "event", None) == "request_started"
    ]
    assert request_started_logs
    query = request_started_logs[-1].query
    assert query["token"] == "[REDACTED]"
    assert query["email"] == "[REDACTED]"
    assert query["q"] == "public"


def test_sanitize_for_logging_redacts_declarant_details() -> None:
    payload = {
        "notes": "Reach the declarant at user@example.org or +1 (415) 555-0101, SSN 123-45-6789, token Bearer abc123.",
        "declarant_name": "Jane Roe",
        "address": "1 Main Street, Newark",
        "bar_number": "012345678",
        "api_key": "plain-value",
        "document_id": "doc-1",
    }

    sanitized = sanitize_for_logging(payload, max_string_length=2000)
    notes = sanitized["notes"]
    assert "user@example.org" not in notes
    assert "415" not in notes
    assert "123-45-6789" not in notes
    assert "[REDACTED_EMAIL]" in notes
    assert "[REDACTED_PHONE]" in notes
    assert "[REDACTED_SSN]" in notes
    assert "Bearer [REDACTED]" in notes
    assert sanitized["declarant_name"] == "[REDACTED]"
    assert sanitized["address"] == "[REDACTED]"
    assert sanitized["bar_number"] == "[REDACTED]"
    assert sanitized["api_key"] == "[REDACTED]"
    assert sanitized["document_id"] == "doc-1"


def test_json_formatter_includes_request_id_and_extras() -> None:
    record = logging.LogRecord("attest.engine", logging.INFO, __file__, 1, "document_assembled", None, None)
    record.event = "document_assembled"
    record.block_count = 9
    token = set_request_id("req-7")
    try:
        RequestIdFilter().filter(record)
    finally:
        reset_request_id(token)

    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "document_assembled"
    assert payload["request_id"] == "req-7"
    assert payload["event"] == "document_assembled"
    assert payload["block_count"] == 9


def test_configure_logging_installs_one_json_handler() -> None:
    root = logging.getLogger()
    original_level = root.level
    try:
        configure_logging("debug")
        configure_logging("warning")
        handlers = [handler for handler in root.handlers if getattr(handler, "_attest_handler", False)]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.setLevel(original_level)
