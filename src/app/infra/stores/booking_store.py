"""Store de Booking sobre o document store (collection `bookings`)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.booking import Booking

if TYPE_CHECKING:
    from app.protocols.document_store import DocumentStoreProtocol

BOOKINGS_COLLECTION = "bookings"


class BookingStore:
    """Leitura e escrita de bookings.

    Toda mudança de status passa por `update`, que grava os campos numa
    única escrita do documento.
    """

    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        collection: str = BOOKINGS_COLLECTION,
    ) -> None:
        self._store = document_store
        self._collection = collection

    async def get(self, booking_id: str) -> Booking | None:
        data = await self._store.get(self._collection, booking_id)
        if data is None:
            return None
        return Booking.from_document(data, doc_id=booking_id)

    async def create(self, booking: Booking) -> None:
        await self._store.put(self._collection, booking.id, booking.to_document())

    async def update(self, booking_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(self._collection, booking_id, _to_storage(fields))

    async def find_by_payment_intent(self, payment_intent_id: str) -> Booking | None:
        rows = await self._store.query(
            self._collection, {"payment_intent_id": payment_intent_id}
        )
        if not rows:
            return None
        doc_id, data = rows[0]
        return Booking.from_document(data, doc_id=doc_id)

    async def list_for_provider(self, provider_id: str) -> list[Booking]:
        rows = await self._store.query(self._collection, {"provider_id": provider_id})
        return [Booking.from_document(data, doc_id=doc_id) for doc_id, data in rows]

    async def list_for_booker(self, booker_id: str) -> list[Booking]:
        rows = await self._store.query(self._collection, {"booker_id": booker_id})
        return [Booking.from_document(data, doc_id=doc_id) for doc_id, data in rows]


def _to_storage(fields: dict[str, Any]) -> dict[str, Any]:
    # Enums gravados pelo valor, como em Booking.to_document()
    return {key: getattr(value, "value", value) for key, value in fields.items()}
