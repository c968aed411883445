"""Contrato de document store (collections de documentos com id).

Consultas usam somente filtros de igualdade; filtragem por intervalo de
tempo é feita em memória pelos serviços de domínio.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Erro de persistência no document store."""


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Contrato para leitura e escrita de documentos por collection."""

    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Busca documento por id; None se não existir."""
        ...

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
    ) -> list[tuple[str, Document]]:
        """Retorna pares (id, documento) que casam com todos os filtros."""
        ...

    async def put(self, collection: str, doc_id: str, data: Document) -> None:
        """Cria ou substitui o documento inteiro."""
        ...

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Atualiza campos de um documento existente numa única escrita.

        Raises:
            DocumentStoreError: se o documento não existir
        """
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Remove documento; retorna False se não existia."""
        ...
