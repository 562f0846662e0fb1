"""Glue between the synchronous Streamlit script and the async API code."""
from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Awaitable, Callable, Sequence

import httpx
import streamlit as st

from app.components.forms import ListFilters
from app.components.notifications import StreamlitNotifier
from app.repositories.entities_repo import delete_entity, fetch_page, patch_entity_status
from app.services.api import ApiConfig, create_client
from app.services.batch_actions import BatchActionOrchestrator
from app.settings import BATCH_CONCURRENCY
from app.state import session_keys as keys
from app.state.session import get_selection
from app.utils.cache import clear_pages_cache

ClientAction = Callable[[httpx.AsyncClient], Awaitable[Any]]
BatchAction = Callable[[BatchActionOrchestrator], Awaitable[Any]]


def run_with_api(action: ClientAction) -> Any:
    """Open an API client, await ``action(client)`` and close the client."""

    async def _go() -> Any:
        async with create_client(ApiConfig.from_env()) as client:
            return await action(client)

    return asyncio.run(_go())


def run_with_client(kind: str, filters: ListFilters, action: BatchAction) -> Any:
    """Build the orchestrator for *kind* over a fresh client and run *action*.

    The orchestrator reloads the list from page one once the batch is done.
    """

    selection = get_selection(kind)
    page_key = keys.scoped(kind, keys.PAGE)

    async def _with_orchestrator(client: httpx.AsyncClient) -> Any:
        async def refetch() -> Sequence[Any]:
            clear_pages_cache()
            st.session_state[page_key] = 1
            fresh = await fetch_page(
                client,
                kind,
                page=1,
                per_page=filters.per_page,
                q=filters.q,
                status=filters.status,
            )
            return fresh.ids

        orchestrator = BatchActionOrchestrator(
            selection,
            kind,
            remove=partial(delete_entity, client, kind),
            patch=partial(patch_entity_status, client, kind),
            refetch=refetch,
            notifier=StreamlitNotifier(),
            concurrency=BATCH_CONCURRENCY,
        )
        return await action(orchestrator)

    return run_with_api(_with_orchestrator)
