"""Streamlit cache helpers used across pages."""
from __future__ import annotations

import asyncio

import streamlit as st

from app.repositories.entities_repo import Page, fetch_page
from app.services.api import ApiConfig, create_client


async def _load_page(kind: str, page: int, per_page: int, q: str, status: str) -> Page:
    async with create_client(ApiConfig.from_env()) as client:
        return await fetch_page(client, kind, page=page, per_page=per_page, q=q, status=status)


@st.cache_data(ttl=15, show_spinner=False)
def fetch_page_cached(kind: str, page: int, per_page: int, q: str = "", status: str = "") -> Page:
    """Fetch one listing page and cache it for a short period."""

    return asyncio.run(_load_page(kind, page, per_page, q, status))


def clear_pages_cache() -> None:
    """Invalidate every cached listing page."""

    fetch_page_cached.clear()
