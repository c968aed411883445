"""Store de Conversation (collection `conversations`)."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from app.domain.conversation import Conversation

if TYPE_CHECKING:
    from app.domain.booking import Booking
    from app.protocols.document_store import DocumentStoreProtocol

CONVERSATIONS_COLLECTION = "conversations"


class ConversationStore:
    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        collection: str = CONVERSATIONS_COLLECTION,
    ) -> None:
        self._store = document_store
        self._collection = collection

    async def find_by_booking(self, booking_id: str) -> Conversation | None:
        rows = await self._store.query(self._collection, {"booking_id": booking_id})
        if not rows:
            return None
        doc_id, data = rows[0]
        return Conversation.from_document(data, doc_id=doc_id)

    async def get_or_create(self, booking: Booking) -> Conversation:
        """Busca a conversa do booking ou cria uma nova com contadores zerados."""
        existing = await self.find_by_booking(booking.id)
        if existing is not None:
            return existing

        conversation = Conversation(
            id=uuid.uuid4().hex,
            booking_id=booking.id,
            provider_id=booking.provider_id,
            booker_id=booking.booker_id,
            provider_name=booking.provider_name,
            booker_name=booking.booker_name,
            participant_ids=[booking.provider_id, booking.booker_id],
            unread_count={booking.provider_id: 0, booking.booker_id: 0},
        )
        await self._store.put(self._collection, conversation.id, conversation.to_document())
        return conversation
