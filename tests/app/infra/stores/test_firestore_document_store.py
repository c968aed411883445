"""Testes do FirestoreDocumentStore com client mockado."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound

from app.infra.stores import FirestoreDocumentStore
from app.protocols.document_store import DocumentStoreError


def _client_with_doc(snapshot: object) -> MagicMock:
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = snapshot
    return client


@pytest.mark.asyncio
async def test_get_returns_dict_or_none() -> None:
    found = SimpleNamespace(exists=True, to_dict=lambda: {"status": "pending"})
    store = FirestoreDocumentStore(_client_with_doc(found))
    assert await store.get("bookings", "bk_1") == {"status": "pending"}

    missing = SimpleNamespace(exists=False, to_dict=lambda: None)
    store = FirestoreDocumentStore(_client_with_doc(missing))
    assert await store.get("bookings", "bk_1") is None


@pytest.mark.asyncio
async def test_query_applies_equality_filters() -> None:
    client = MagicMock()
    collection = client.collection.return_value
    filtered = collection.where.return_value
    filtered.stream.return_value = [
        SimpleNamespace(id="bk_1", to_dict=lambda: {"provider_id": "prov_1"}),
    ]
    store = FirestoreDocumentStore(client)

    rows = await store.query("bookings", {"provider_id": "prov_1"})

    assert rows == [("bk_1", {"provider_id": "prov_1"})]
    field_filter = collection.where.call_args.kwargs["filter"]
    assert field_filter.field_path == "provider_id"
    assert field_filter.op_string == "=="
    assert field_filter.value == "prov_1"


@pytest.mark.asyncio
async def test_put_sets_document() -> None:
    client = MagicMock()
    store = FirestoreDocumentStore(client)

    await store.put("users", "prov_1", {"timezone": "UTC"})

    client.collection.assert_called_with("users")
    client.collection.return_value.document.return_value.set.assert_called_once_with(
        {"timezone": "UTC"}
    )


@pytest.mark.asyncio
async def test_update_missing_document_raises_store_error() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.update.side_effect = NotFound("gone")
    store = FirestoreDocumentStore(client)

    with pytest.raises(DocumentStoreError):
        await store.update("bookings", "bk_1", {"status": "confirmed"})


@pytest.mark.asyncio
async def test_sdk_failure_is_wrapped() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.get.side_effect = RuntimeError("boom")
    store = FirestoreDocumentStore(client)

    with pytest.raises(DocumentStoreError):
        await store.get("bookings", "bk_1")


@pytest.mark.asyncio
async def test_delete_reports_existence() -> None:
    client = _client_with_doc(SimpleNamespace(exists=True))
    store = FirestoreDocumentStore(client)
    assert await store.delete("availability", "r1") is True
    client.collection.return_value.document.return_value.delete.assert_called_once()

    client = _client_with_doc(SimpleNamespace(exists=False))
    store = FirestoreDocumentStore(client)
    assert await store.delete("availability", "r1") is False
