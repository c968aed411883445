"""Testes abrangentes para config.logging.

Cobre: configure_logging, get_logger, log_side_effect_failure,
CorrelationIdFilter (incluindo remoção de campos sensíveis),
create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REDACTED_FIELDS,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_side_effect_failure,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("INFO", logging.INFO),
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_configure_logging_sets_level(self, level: str, expected: int) -> None:
        """Aceita níveis válidos sem diferenciar maiúsculas."""
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """Configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "bookit_scheduling"

    def test_get_logger_returns_named_logger(self) -> None:
        logger = get_logger("bookit.module")
        assert logger is get_logger("bookit.module")
        assert logger.name == "bookit.module"


class TestLogSideEffectFailure:
    """Testes para log_side_effect_failure."""

    def test_logs_warning_named_by_action(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_side_effect_failure(
            logger,
            "notifier",
            "notification_failed",
            ConnectionError("smtp down"),
            booking_id="bk_1",
        )

        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("notification_failed",)
        assert kwargs["extra"] == {
            "component": "notifier",
            "action": "notification_failed",
            "result": "swallowed",
            "error_type": "ConnectionError",
            "booking_id": "bk_1",
        }

    def test_omits_booking_id_when_absent(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_side_effect_failure(logger, "conversations", "conversation_failed", RuntimeError())

        assert "booking_id" not in logger.warning.call_args[1]["extra"]


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_and_service(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()

        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"

        filter_.filter(record)

        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()

        filter_.filter(record)

        assert record.correlation_id == ""

    def test_filter_removes_sensitive_fields(self) -> None:
        """Emails e segredos passados via extra nunca chegam ao handler."""
        filter_ = CorrelationIdFilter("svc")
        record = _record()
        record.booker_email = "bruno@example.com"
        record.stripe_signature = "t=1,v1=abc"
        record.booking_id = "bk_1"

        filter_.filter(record)

        assert not hasattr(record, "booker_email")
        assert not hasattr(record, "stripe_signature")
        assert record.booking_id == "bk_1"
        assert {"email", "client_secret", "secret_key"} <= REDACTED_FIELDS


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_fields_and_rename_map(self) -> None:
        assert REQUIRED_LOG_FIELDS == (
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        )
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record_with_extras(self) -> None:
        from pythonjsonlogger.json import JsonFormatter

        formatter = create_json_formatter()
        assert isinstance(formatter, JsonFormatter)
        record = _record("booking_confirmed")
        record.correlation_id = "abc-123"
        record.service = "bookit_scheduling"
        record.component = "booking_lifecycle"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "booking_confirmed"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["correlation_id"] == "abc-123"
        assert payload["component"] == "booking_lifecycle"


class TestLoggingIntegration:
    def test_full_logging_flow(self) -> None:
        """Fluxo completo: configure, get_logger, log."""
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        logger.info("booking_created", extra={"booking_id": "bk_1", "booker_email": "x@y.z"})
        logger.warning("notification_failed", extra={"component": "notifier"})
        configure_logging()
