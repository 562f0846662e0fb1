"""Form helpers shared across Streamlit pages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import streamlit as st

from app.models.lifecycle import status_label
from app.settings import DEFAULT_PER_PAGE
from app.state import session_keys as keys
from app.utils.constants import PER_PAGE_OPTIONS


_SIDEBAR_LINKS: Iterable[tuple[str, str]] = (
    ("Home.py", "🏠 Beranda"),
    ("pages/1_Donasi.py", "💳 Donasi"),
    ("pages/2_Jemput_Wakaf.py", "🚚 Jemput Wakaf"),
    ("pages/3_Konsultasi.py", "💬 Konsultasi"),
    ("pages/4_Konten.py", "📰 Konten"),
    ("pages/5_Pengguna.py", "👥 Pengguna"),
)


@dataclass(frozen=True)
class ListFilters:
    q: str
    status: str
    per_page: int


def _render_nav_link(target: str, label: str) -> None:
    """Render a sidebar navigation link with a graceful fallback."""

    if hasattr(st, "page_link"):
        st.page_link(target, label=label)
        return

    safe_target = target.replace("/", "_").replace(".", "_")
    button_key = f"nav_to_{safe_target}"
    if st.button(label, use_container_width=True, key=button_key) and hasattr(st, "switch_page"):
        st.switch_page(target)


def render_sidebar() -> None:
    """Display the sidebar navigation."""

    with st.sidebar:
        st.subheader("Navigasi")
        for target, label in _SIDEBAR_LINKS:
            _render_nav_link(target, label)
        st.divider()
        st.caption("Data yang berstatus terkunci tidak dapat diubah atau dihapus.")


def _reset_filters(kind: str) -> None:
    for key in (keys.SEARCH_FILTER, keys.STATUS_FILTER):
        st.session_state.pop(keys.scoped(kind, key), None)
    st.session_state[keys.scoped(kind, keys.PAGE)] = 1
    st.session_state[keys.scoped(kind, keys.FILTER_RESET)] = False


def render_list_filters(kind: str, status_options: Sequence[str] = ()) -> ListFilters:
    """Render search, status and page-size filters for the screen of *kind*."""

    if st.session_state.get(keys.scoped(kind, keys.FILTER_RESET), False):
        _reset_filters(kind)

    with st.expander("Filter", expanded=True):
        col_q, col_status, col_per_page = st.columns([2.2, 1.4, 1.0])
        with col_q:
            q = st.text_input(
                "Pencarian",
                placeholder="Cari nama, kode, atau telepon",
                key=keys.scoped(kind, keys.SEARCH_FILTER),
            )
        with col_status:
            if status_options:
                status = st.selectbox(
                    "Status",
                    options=["", *status_options],
                    format_func=lambda v: status_label(kind, v) if v else "Semua status",
                    key=keys.scoped(kind, keys.STATUS_FILTER),
                )
            else:
                status = ""
        with col_per_page:
            per_page_default = DEFAULT_PER_PAGE if DEFAULT_PER_PAGE in PER_PAGE_OPTIONS else PER_PAGE_OPTIONS[0]
            per_page = st.selectbox(
                "Per halaman",
                options=PER_PAGE_OPTIONS,
                index=PER_PAGE_OPTIONS.index(per_page_default),
                key=keys.scoped(kind, keys.PER_PAGE),
            )

        col_reset, _ = st.columns([1, 3])
        with col_reset:
            if st.button("🧭 Reset filter", use_container_width=True, key=f"btn_reset_{kind}"):
                st.session_state[keys.scoped(kind, keys.FILTER_RESET)] = True
                st.rerun()

    return ListFilters(q=(q or "").strip(), status=status or "", per_page=int(per_page))
