from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.components.status_editor import delete_row, save_row_status
from app.services.api import ApiConfig, create_client
from app.utils.constants import EntityKind

CONFIG = ApiConfig(base_url="https://api.test/api", token="secret")


class _Notifier:
    def __init__(self) -> None:
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def error(self, message):
        self.messages.append(("error", message))

    def warning(self, message):
        self.messages.append(("warning", message))


class _Server:
    """Answers GET with the stored entity and records every other request."""

    def __init__(self, entity) -> None:
        self.entity = entity
        self.writes = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=self.entity)
        body = json.loads(request.content) if request.content else None
        self.writes.append((request.method, request.url.path, body))
        return httpx.Response(200, json={"message": "ok"})


def _client(server):
    return create_client(CONFIG, transport=httpx.MockTransport(server))


@pytest.mark.asyncio
async def test_delete_row_sends_delete_for_initial_status():
    server = _Server({"id": 3, "status": "baru"})
    notifier = _Notifier()

    async with _client(server) as client:
        deleted = await delete_row(client, EntityKind.PICKUP_REQUEST, 3, notifier)

    assert deleted is True
    assert server.writes == [("DELETE", "/api/admin/pickup-requests/3", None)]
    assert notifier.messages == [("success", "Data berhasil dihapus.")]


@pytest.mark.asyncio
async def test_delete_row_uses_fresh_status_and_never_deletes_locked_rows():
    # The list may still show "baru" while the server already moved on.
    server = _Server({"id": 3, "status": "dijadwalkan"})
    notifier = _Notifier()

    async with _client(server) as client:
        deleted = await delete_row(client, EntityKind.PICKUP_REQUEST, 3, notifier)

    assert deleted is False
    assert server.writes == []
    assert [severity for severity, _ in notifier.messages] == ["warning"]


@pytest.mark.asyncio
async def test_save_row_status_patches_allowed_transition():
    server = _Server({"id": 8, "status": "pending"})
    notifier = _Notifier()

    async with _client(server) as client:
        saved = await save_row_status(
            client, EntityKind.DONATION, 8, "paid", {"paid_at": "2024-05-01", "notes": ""}, notifier
        )

    assert saved is True
    assert server.writes == [
        ("PATCH", "/api/admin/donations/8/status", {"status": "paid", "paid_at": "2024-05-01", "notes": None})
    ]


@pytest.mark.asyncio
async def test_save_row_status_rejects_locked_row_before_patch():
    server = _Server({"id": 8, "status": "paid"})
    notifier = _Notifier()

    async with _client(server) as client:
        saved = await save_row_status(client, EntityKind.DONATION, 8, "cancelled", None, notifier)

    assert saved is False
    assert server.writes == []
    assert notifier.messages[0][0] == "warning"
