from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.repositories import entities_repo
from app.repositories.entities_repo import Page
from app.services.api import ApiConfig, ApiError, create_client
from app.services.batch import Err, Ok
from app.utils.constants import EntityKind

CONFIG = ApiConfig(base_url="https://api.test/api", token="secret")


def _client(handler):
    return create_client(CONFIG, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_page_sends_filters_and_parses_pagination():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "data": [{"id": 1, "status": "baru"}, {"id": 2, "status": "selesai"}],
                "current_page": 2,
                "per_page": 2,
                "last_page": 3,
                "total": 6,
            },
        )

    async with _client(handler) as client:
        page = await entities_repo.fetch_page(
            client, EntityKind.PICKUP_REQUEST, page=2, per_page=2, q="  budi ", status="baru"
        )

    assert seen["path"] == "/api/admin/pickup-requests"
    assert seen["params"] == {"page": "2", "per_page": "2", "q": "budi", "status": "baru"}
    assert seen["auth"] == "Bearer secret"
    assert page.ids == [1, 2]
    assert page.label() == "Menampilkan 3-4 dari 6."


@pytest.mark.asyncio
async def test_fetch_page_omits_empty_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": []})

    async with _client(handler) as client:
        page = await entities_repo.fetch_page(client, EntityKind.USER)

    assert seen["params"] == {"page": "1", "per_page": "15"}
    assert page.label() == "Tidak ada data."


@pytest.mark.asyncio
async def test_fetch_page_raises_api_error_with_server_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "Forbidden."})

    async with _client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await entities_repo.fetch_page(client, EntityKind.DONATION)

    assert exc_info.value.status_code == 403
    assert str(exc_info.value) == "Forbidden. (HTTP 403)"


@pytest.mark.asyncio
async def test_delete_entity_returns_results_instead_of_raising():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        if request.url.path.endswith("/2"):
            return httpx.Response(404, json={"message": "Donation not found."})
        return httpx.Response(200, json={"message": "Donation deleted."})

    async with _client(handler) as client:
        ok = await entities_repo.delete_entity(client, EntityKind.DONATION, 1)
        missing = await entities_repo.delete_entity(client, EntityKind.DONATION, 2)

    assert ok == Ok(1)
    assert isinstance(missing, Err)
    assert missing.error.status_code == 404
    assert missing.error.message == "Donation not found."


@pytest.mark.asyncio
async def test_delete_entity_turns_transport_errors_into_err():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        result = await entities_repo.delete_entity(client, EntityKind.BANNER, 4)

    assert isinstance(result, Err)
    assert result.error.status_code is None


@pytest.mark.asyncio
async def test_patch_entity_status_posts_allowed_metadata_only():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 7, "status": "dijadwalkan"})

    async with _client(handler) as client:
        result = await entities_repo.patch_entity_status(
            client,
            EntityKind.PICKUP_REQUEST,
            7,
            "dijadwalkan",
            {"assigned_officer": " Ahmad ", "notes": "", "admin_notes": "ignored"},
        )

    assert seen["method"] == "PATCH"
    assert seen["path"] == "/api/admin/pickup-requests/7/status"
    assert seen["body"] == {"status": "dijadwalkan", "assigned_officer": "Ahmad", "notes": None}
    assert result == Ok({"id": 7, "status": "dijadwalkan"})


def test_resource_paths_use_scope():
    assert entities_repo.resource_path(EntityKind.USER, 3) == "/superadmin/users/3"
    assert entities_repo.resource_path(EntityKind.CONSULTATION) == "/admin/consultations"
    with pytest.raises(ValueError):
        entities_repo.resource_path("unknown")


def test_page_from_plain_list_payload():
    page = Page.from_payload([{"id": "a"}, {"id": "b"}], page=1, per_page=15)

    assert page.ids == ["a", "b"]
    assert page.total == 2
    assert page.label() == "Menampilkan 1-2 dari 2."


@pytest.mark.asyncio
async def test_fetch_entity_returns_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/admin/consultations/12"
        return httpx.Response(200, json={"id": 12, "status": "baru"})

    async with _client(handler) as client:
        entity = await entities_repo.fetch_entity(client, EntityKind.CONSULTATION, 12)

    assert entity == {"id": 12, "status": "baru"}
