"""Filters de logging para injeção de contexto.

Filters são responsáveis por adicionar campos contextuais aos logs sem
que o chamador precise informá-los manualmente, e por remover campos
que nunca devem ser gravados.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: bookit_scheduling)

Campos removidos: endereços de email e segredos de pagamento.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de `extra` que nunca chegam ao handler
REDACTED_FIELDS = frozenset(
    {
        "email",
        "booker_email",
        "recipient_email",
        "client_secret",
        "stripe_signature",
        "secret_key",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        for field in REDACTED_FIELDS.intersection(record.__dict__):
            delattr(record, field)
        return True
