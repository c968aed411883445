"""Firestore Document Store: persistência de users, availability, bookings e conversations.

Usa asyncio.to_thread pois o SDK do Firestore não tem API async nativa
no client síncrono.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from app.protocols.document_store import Document, DocumentStoreError, DocumentStoreProtocol

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStoreProtocol):
    """Document store usando Firestore.

    Cada escrita é atômica por documento; não há transações entre documentos.

    Args:
        firestore_client: Cliente Firestore
    """

    def __init__(self, firestore_client: FirestoreClient) -> None:
        self._db = firestore_client

    async def get(self, collection: str, doc_id: str) -> Document | None:
        return await asyncio.to_thread(self._get_sync, collection, doc_id)

    def _get_sync(self, collection: str, doc_id: str) -> Document | None:
        try:
            snapshot = self._db.collection(collection).document(doc_id).get()
        except Exception as exc:
            self._log_failure("get", collection, exc)
            raise DocumentStoreError(f"Erro ao ler {collection}/{doc_id}: {exc}") from exc
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
    ) -> list[tuple[str, Document]]:
        return await asyncio.to_thread(self._query_sync, collection, dict(filters or {}))

    def _query_sync(self, collection: str, filters: dict[str, Any]) -> list[tuple[str, Document]]:
        query = self._db.collection(collection)
        for field, value in filters.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        try:
            return [(snapshot.id, snapshot.to_dict() or {}) for snapshot in query.stream()]
        except Exception as exc:
            self._log_failure("query", collection, exc)
            raise DocumentStoreError(f"Erro ao consultar {collection}: {exc}") from exc

    async def put(self, collection: str, doc_id: str, data: Document) -> None:
        await asyncio.to_thread(self._put_sync, collection, doc_id, data)

    def _put_sync(self, collection: str, doc_id: str, data: Document) -> None:
        try:
            self._db.collection(collection).document(doc_id).set(data)
            logger.debug(
                "document_put",
                extra={"component": "document_store", "collection": collection},
            )
        except Exception as exc:
            self._log_failure("put", collection, exc)
            raise DocumentStoreError(f"Erro ao gravar {collection}/{doc_id}: {exc}") from exc

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        await asyncio.to_thread(self._update_sync, collection, doc_id, fields)

    def _update_sync(self, collection: str, doc_id: str, fields: Document) -> None:
        try:
            self._db.collection(collection).document(doc_id).update(fields)
        except NotFound as exc:
            raise DocumentStoreError(f"Documento inexistente: {collection}/{doc_id}") from exc
        except Exception as exc:
            self._log_failure("update", collection, exc)
            raise DocumentStoreError(f"Erro ao atualizar {collection}/{doc_id}: {exc}") from exc

    async def delete(self, collection: str, doc_id: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, collection, doc_id)

    def _delete_sync(self, collection: str, doc_id: str) -> bool:
        ref = self._db.collection(collection).document(doc_id)
        try:
            if not ref.get().exists:
                return False
            ref.delete()
            return True
        except Exception as exc:
            self._log_failure("delete", collection, exc)
            raise DocumentStoreError(f"Erro ao remover {collection}/{doc_id}: {exc}") from exc

    @staticmethod
    def _log_failure(action: str, collection: str, exc: Exception) -> None:
        logger.error(
            "document_store_failed",
            extra={
                "component": "document_store",
                "action": action,
                "result": "error",
                "collection": collection,
                "error_type": type(exc).__name__,
            },
        )
