"""
Tests for structured logging
"""

import json
import logging

from httpx import AsyncClient

from landing_builder.middleware.logging import (
    ACCESS_LOGGER,
    RequestIdFilter,
    StructuredFormatter,
    request_id_var,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("landing_builder.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_json_fields(self):
        data = json.loads(StructuredFormatter().format(_record(request_id="r1", path="/x", status_code=200)))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "landing_builder.test"
        assert data["request_id"] == "r1"
        assert data["path"] == "/x"
        assert data["status_code"] == 200

    def test_unknown_extras_ignored(self):
        data = json.loads(StructuredFormatter().format(_record(secret="x")))
        assert "secret" not in data


class TestRequestIdFilter:
    def test_adds_request_id(self):
        token = request_id_var.set("abc")
        try:
            record = _record()
            assert RequestIdFilter().filter(record)
            assert record.request_id == "abc"
        finally:
            request_id_var.reset(token)


class TestAccessLog:
    async def test_logs_request(self, client: AsyncClient, acme, caplog):
        with caplog.at_level(logging.INFO, logger=ACCESS_LOGGER):
            response = await client.get("/public/sites/acme/nope")
        assert response.headers["x-request-id"]
        records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert records
        assert records[-1].levelno == logging.WARNING
        assert records[-1].status_code == 404
        assert records[-1].subdomain == "acme"

    async def test_health_not_logged(self, client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger=ACCESS_LOGGER):
            await client.get("/health")
        assert not [r for r in caplog.records if r.name == ACCESS_LOGGER]
