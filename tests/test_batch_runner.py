from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import httpx

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.components import batch_runner
from app.services.api import ApiConfig, create_client

CONFIG = ApiConfig(base_url="https://api.test/api", token="secret")


def test_run_with_api_hands_a_client_to_the_action(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 1, "status": "baru"})

    monkeypatch.setattr(batch_runner, "ApiConfig", SimpleNamespace(from_env=lambda: CONFIG))
    monkeypatch.setattr(
        batch_runner,
        "create_client",
        lambda config: create_client(config, transport=httpx.MockTransport(handler)),
    )

    async def action(client):
        response = await client.get("/admin/consultations/1")
        return response.json()

    assert batch_runner.run_with_api(action) == {"id": 1, "status": "baru"}
