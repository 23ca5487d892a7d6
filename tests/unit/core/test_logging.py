"""
Test structured logging configuration
"""
import json
import logging

from core.logging import ContextTextFormatter, CustomJsonFormatter, build_formatter, get_logger


def make_record(**context):
    record = logging.LogRecord("gateway.lightbox", logging.WARNING, __file__, 1, "HTTP 500", None, None)
    for key, value in context.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_text_formatter_appends_context(self):
        formatter = ContextTextFormatter("%(levelname)s %(message)s")

        line = formatter.format(make_record(domain="d0", provider="lightbox", operation="zoning_parcel"))

        assert line == "WARNING HTTP 500 [domain=d0 provider=lightbox operation=zoning_parcel]"

    def test_text_formatter_without_context(self):
        formatter = ContextTextFormatter("%(message)s")

        assert formatter.format(make_record()) == "HTTP 500"

    def test_json_formatter_fields(self):
        formatter = build_formatter("json")

        data = json.loads(formatter.format(make_record(provider="rentcast", path="/api/comps")))

        assert isinstance(formatter, CustomJsonFormatter)
        assert data["message"] == "HTTP 500"
        assert data["level"] == "WARNING"
        assert data["logger"] == "gateway.lightbox"
        assert data["provider"] == "rentcast"
        assert data["path"] == "/api/comps"
        assert "timestamp" in data

    def test_text_format_selected(self):
        assert isinstance(build_formatter("text"), ContextTextFormatter)


class TestLoggerAdapter:
    def test_bound_context_reaches_record(self, caplog):
        logger = get_logger("tests.logging", domain="d4")

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            logger.info("enrich")

        assert caplog.records[-1].domain == "d4"

    def test_with_context_extends_without_mutating(self, caplog):
        parent = get_logger("tests.logging", provider="lightbox")
        child = parent.with_context(operation="parcels_geometry")

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            child.info("lookup")
            parent.info("plain")

        child_record, parent_record = caplog.records[-2:]
        assert child_record.provider == "lightbox"
        assert child_record.operation == "parcels_geometry"
        assert not hasattr(parent_record, "operation")

    def test_call_extra_overrides_bound_context(self, caplog):
        logger = get_logger("tests.logging", operation="default")

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            logger.info("override", extra={"operation": "explicit"})

        assert caplog.records[-1].operation == "explicit"
