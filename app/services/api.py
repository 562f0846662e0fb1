"""Helpers for talking to the back-office HTTP API."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import httpx
from dotenv import load_dotenv

DEFAULT_TIMEOUT = 15.0


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class ApiConfig:
    base_url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Load configuration from ``.env`` files and environment variables."""

        load_dotenv()
        return cls(
            base_url=os.getenv("DPF_API_BASE_URL", "").rstrip("/"),
            token=os.getenv("DPF_API_TOKEN", ""),
            timeout=_float_env("DPF_API_TIMEOUT", DEFAULT_TIMEOUT),
        )


class ApiError(Exception):
    """A non-2xx answer (or transport failure) from the API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        message = ""
        try:
            payload: Any = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            message = str(payload.get("message") or "")
        return cls(message or response.reason_phrase or "Terjadi kesalahan yang tidak diketahui.", response.status_code)


def create_client(config: ApiConfig, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the ``httpx`` client used by the repositories.

    *transport* lets tests plug an ``httpx.MockTransport`` in place of the
    network.
    """

    if not (config.base_url and config.token):
        raise RuntimeError("Isi DPF_API_BASE_URL dan DPF_API_TOKEN di .env.")

    return httpx.AsyncClient(
        base_url=config.base_url,
        headers={"Authorization": f"Bearer {config.token}", "Accept": "application/json"},
        timeout=config.timeout,
        transport=transport,
    )


def raise_for_api_error(response: httpx.Response) -> httpx.Response:
    if response.is_error:
        raise ApiError.from_response(response)
    return response
