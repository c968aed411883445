"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="bookit_scheduling")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("booking_created", extra={"booking_id": "bk_1"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "bookit_scheduling"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)


def log_side_effect_failure(
    logger: logging.Logger,
    component: str,
    action: str,
    exc: BaseException,
    *,
    booking_id: str | None = None,
) -> None:
    """Registra falha de efeito colateral que não interrompe a operação.

    Usado quando notificação ou criação de conversa falha depois que o
    status do booking já foi gravado. Só o tipo do erro é registrado.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "notifier").
        action: Ação que falhou (ex: "notification_failed").
        exc: Exceção capturada.
        booking_id: Booking afetado, quando houver.

    Exemplo:
        log_side_effect_failure(
            logger,
            "notifier",
            "notification_failed",
            exc,
            booking_id=booking.id,
        )
    """
    extra: dict[str, object] = {
        "component": component,
        "action": action,
        "result": "swallowed",
        "error_type": type(exc).__name__,
    }
    if booking_id:
        extra["booking_id"] = booking_id

    logger.warning(action, extra=extra)
