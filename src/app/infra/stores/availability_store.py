"""Store de regras de disponibilidade (collection `availability`)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.availability import (
    AvailabilityRule,
    ExclusionRule,
    RecurringRule,
    availability_rule_from_document,
)

if TYPE_CHECKING:
    from app.protocols.document_store import DocumentStoreProtocol

AVAILABILITY_COLLECTION = "availability"


class AvailabilityStore:
    """Regras recorrentes e exclusões de um provider.

    Sem update in-place: regras são criadas e apagadas.
    """

    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        collection: str = AVAILABILITY_COLLECTION,
    ) -> None:
        self._store = document_store
        self._collection = collection

    async def add(self, rule: AvailabilityRule) -> None:
        await self._store.put(self._collection, rule.id, rule.to_document())

    async def get(self, rule_id: str) -> AvailabilityRule | None:
        data = await self._store.get(self._collection, rule_id)
        if data is None:
            return None
        return availability_rule_from_document(data, doc_id=rule_id)

    async def delete(self, rule_id: str) -> bool:
        return await self._store.delete(self._collection, rule_id)

    async def list_for_provider(
        self, provider_id: str
    ) -> tuple[list[RecurringRule], list[ExclusionRule]]:
        """Retorna (recorrentes, exclusões) do provider."""
        rows = await self._store.query(self._collection, {"provider_id": provider_id})
        recurring: list[RecurringRule] = []
        exclusions: list[ExclusionRule] = []
        for doc_id, data in rows:
            rule = availability_rule_from_document(data, doc_id=doc_id)
            if isinstance(rule, RecurringRule):
                recurring.append(rule)
            else:
                exclusions.append(rule)
        return recurring, exclusions
