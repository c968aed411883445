"""Document store em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from app.protocols.document_store import Document, DocumentStoreError, DocumentStoreProtocol


class MemoryDocumentStore(DocumentStoreProtocol):
    """Document store em memória: apenas para dev/test.

    Documentos são copiados na entrada e na saída para que o chamador não
    altere o estado armazenado por referência.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    def _collection(self, name: str) -> dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, doc_id: str) -> Document | None:
        data = self._collection(collection).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
    ) -> list[tuple[str, Document]]:
        criteria = dict(filters or {})
        return [
            (doc_id, copy.deepcopy(data))
            for doc_id, data in self._collection(collection).items()
            if all(data.get(field) == value for field, value in criteria.items())
        ]

    async def put(self, collection: str, doc_id: str, data: Document) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(data)

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        documents = self._collection(collection)
        if doc_id not in documents:
            raise DocumentStoreError(f"Documento inexistente: {collection}/{doc_id}")
        documents[doc_id].update(copy.deepcopy(fields))

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._collection(collection).pop(doc_id, None) is not None

    def clear(self) -> None:
        """Limpa todas as collections (útil em testes)."""
        self._collections.clear()
