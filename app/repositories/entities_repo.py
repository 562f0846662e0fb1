"""Repository helpers over the admin resources of the HTTP API."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

import httpx

from app.services.api import ApiError, raise_for_api_error
from app.services.batch import Err, Ok, Result
from app.state.selection import EntityId
from app.utils.constants import RESOURCES, STATUS_METADATA_FIELDS

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of a paginated listing."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    current_page: int = 1
    per_page: int = 15
    last_page: int = 1
    total: int = 0

    @property
    def ids(self) -> List[EntityId]:
        return [item["id"] for item in self.items if "id" in item]

    def label(self) -> str:
        if not self.total:
            return "Tidak ada data."
        start = (self.current_page - 1) * self.per_page + 1
        end = min(self.current_page * self.per_page, self.total)
        return f"Menampilkan {start}-{end} dari {self.total}."

    @classmethod
    def from_payload(cls, payload: Any, *, page: int, per_page: int) -> "Page":
        if isinstance(payload, list):
            return cls(items=list(payload), current_page=1, per_page=max(len(payload), 1), total=len(payload))
        payload = payload or {}
        return cls(
            items=list(payload.get("data") or []),
            current_page=int(payload.get("current_page") or page),
            per_page=int(payload.get("per_page") or per_page),
            last_page=int(payload.get("last_page") or 1),
            total=int(payload.get("total") or 0),
        )


def resource_path(kind: str, entity_id: EntityId | None = None) -> str:
    try:
        base = RESOURCES[kind].path()
    except KeyError:
        raise ValueError(f"Unknown entity kind: {kind!r}") from None
    if entity_id is None:
        return base
    return f"{base}/{entity_id}"


async def fetch_page(
    client: httpx.AsyncClient,
    kind: str,
    *,
    page: int = 1,
    per_page: int = 15,
    q: str = "",
    status: str = "",
) -> Page:
    params: Dict[str, Any] = {"page": page, "per_page": per_page}
    if q.strip():
        params["q"] = q.strip()
    if status:
        params["status"] = status

    try:
        response = await client.get(resource_path(kind), params=params)
    except httpx.HTTPError as exc:
        raise ApiError(f"Gagal memuat data: {exc}") from exc
    raise_for_api_error(response)
    return Page.from_payload(response.json(), page=page, per_page=per_page)


async def fetch_entity(client: httpx.AsyncClient, kind: str, entity_id: EntityId) -> Dict[str, Any]:
    try:
        response = await client.get(resource_path(kind, entity_id))
    except httpx.HTTPError as exc:
        raise ApiError(f"Gagal memuat detail: {exc}") from exc
    raise_for_api_error(response)
    return response.json()


async def delete_entity(client: httpx.AsyncClient, kind: str, entity_id: EntityId) -> Result:
    """Delete one entity, returning ``Ok``/``Err`` instead of raising."""

    try:
        response = await client.delete(resource_path(kind, entity_id))
    except httpx.HTTPError as exc:
        return Err(ApiError(f"Gagal menghapus: {exc}"))
    if response.is_error:
        return Err(ApiError.from_response(response))
    return Ok(entity_id)


def build_status_payload(kind: str, new_status: str, metadata: Mapping[str, Any] | None = None) -> Dict[str, Any]:
    """Keep only the metadata fields the status endpoint of *kind* accepts."""

    payload: Dict[str, Any] = {"status": new_status}
    allowed = STATUS_METADATA_FIELDS.get(kind, ())
    for key, value in (metadata or {}).items():
        if key not in allowed:
            logger.debug("Dropping unsupported status field %r for %s", key, kind)
            continue
        if isinstance(value, str):
            value = value.strip() or None
        payload[key] = value
    return payload


async def patch_entity_status(
    client: httpx.AsyncClient,
    kind: str,
    entity_id: EntityId,
    new_status: str,
    metadata: Mapping[str, Any] | None = None,
) -> Result:
    payload = build_status_payload(kind, new_status, metadata)
    try:
        response = await client.patch(f"{resource_path(kind, entity_id)}/status", json=payload)
    except httpx.HTTPError as exc:
        return Err(ApiError(f"Gagal memperbarui status: {exc}"))
    if response.is_error:
        return Err(ApiError.from_response(response))
    return Ok(response.json())
