"""Settings do document store (Firestore ou memória).

Configurações para Google Cloud Firestore e nomes das collections.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

DocumentStoreBackend = Literal["memory", "firestore"]


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        backend: Backend do document store (memory|firestore)
        collection_users: Collection de perfis de usuário
        collection_availability: Collection de regras de disponibilidade
        collection_bookings: Collection de bookings
        collection_conversations: Collection de conversas
    """

    project_id: str = ""
    backend: DocumentStoreBackend = "memory"
    collection_users: str = "users"
    collection_availability: str = "availability"
    collection_bookings: str = "bookings"
    collection_conversations: str = "conversations"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "firestore"):
            errors.append(f"DOCUMENT_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "firestore" and not (self.project_id or gcp_project):
            errors.append(
                "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        backend=os.getenv("DOCUMENT_STORE_BACKEND", "memory").lower(),  # type: ignore[arg-type]
        collection_users=os.getenv("FIRESTORE_COLLECTION_USERS", "users"),
        collection_availability=os.getenv(
            "FIRESTORE_COLLECTION_AVAILABILITY", "availability"
        ),
        collection_bookings=os.getenv("FIRESTORE_COLLECTION_BOOKINGS", "bookings"),
        collection_conversations=os.getenv(
            "FIRESTORE_COLLECTION_CONVERSATIONS", "conversations"
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
