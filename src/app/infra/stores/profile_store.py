"""Store de UserProfile (collection `users`)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.user_profile import UserProfile

if TYPE_CHECKING:
    from app.protocols.document_store import DocumentStoreProtocol

USERS_COLLECTION = "users"


class UserProfileStore:
    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        collection: str = USERS_COLLECTION,
    ) -> None:
        self._store = document_store
        self._collection = collection

    async def get(self, user_id: str) -> UserProfile | None:
        data = await self._store.get(self._collection, user_id)
        if data is None:
            return None
        return UserProfile.from_document(data, doc_id=user_id)

    async def upsert(self, profile: UserProfile) -> None:
        await self._store.put(self._collection, profile.id, profile.to_document())

    async def find_by_stripe_account(self, account_id: str) -> UserProfile | None:
        rows = await self._store.query(self._collection, {"stripe_account_id": account_id})
        if not rows:
            return None
        doc_id, data = rows[0]
        return UserProfile.from_document(data, doc_id=doc_id)

    async def update(self, user_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(self._collection, user_id, fields)
