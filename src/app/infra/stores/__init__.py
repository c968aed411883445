"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - firestore_document_store: Document store usando Firestore
    - memory_document_store: Document store em memória (dev/test)
    - booking_store, profile_store, availability_store, conversation_store:
      stores de domínio sobre qualquer document store
"""

from __future__ import annotations

from app.infra.stores.availability_store import AvailabilityStore
from app.infra.stores.booking_store import BookingStore
from app.infra.stores.conversation_store import ConversationStore
from app.infra.stores.firestore_document_store import FirestoreDocumentStore
from app.infra.stores.memory_document_store import MemoryDocumentStore
from app.infra.stores.profile_store import UserProfileStore

__all__ = [
    # Domínio
    "AvailabilityStore",
    "BookingStore",
    "ConversationStore",
    # Firestore
    "FirestoreDocumentStore",
    # Memory (dev/test)
    "MemoryDocumentStore",
    "UserProfileStore",
]
