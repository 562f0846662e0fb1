"""Generic list screen: filters, paginated table, selection and bulk actions."""
from __future__ import annotations

import logging
from typing import Any, Dict

import streamlit as st

from app.components.batch_runner import run_with_client
from app.components.bulk_actions import render_bulk_actions_bar, reset_editor
from app.components.forms import ListFilters, render_list_filters
from app.components.notifications import render_flash_messages
from app.components.status_editor import render_status_tools
from app.exporters.csv_exporter import generate_csv_payload
from app.models.entity import ID_COLUMN, SELECT_COLUMN, build_list_dataframe, states_by_id
from app.models.lifecycle import has_lifecycle
from app.repositories.entities_repo import Page
from app.services.batch_actions import eligible_for_delete
from app.state import session_keys as keys
from app.state.selection import SelectionStore
from app.state.session import get_selection
from app.utils.cache import fetch_page_cached
from app.utils.constants import RESOURCES, TRANSITIONS

logger = logging.getLogger(__name__)


def _capture_selection_edits(kind: str, selection: SelectionStore, index_to_id: Dict[int, Any]) -> None:
    ed_state = st.session_state.get(keys.scoped(kind, keys.EDITOR), {})
    for idx, changes in ed_state.get("edited_rows", {}).items():
        entity_id = index_to_id.get(int(idx))
        if entity_id is None or SELECT_COLUMN not in changes:
            continue
        if bool(changes[SELECT_COLUMN]) != selection.is_selected(entity_id):
            selection.toggle(entity_id)


def _render_pagination(kind: str, page: Page) -> None:
    page_key = keys.scoped(kind, keys.PAGE)
    col_prev, col_info, col_next = st.columns([1, 2, 1])
    with col_prev:
        if st.button("◀ Sebelumnya", use_container_width=True, disabled=page.current_page <= 1, key=f"prev_{kind}"):
            st.session_state[page_key] = max(1, page.current_page - 1)
            reset_editor(kind)
            st.rerun()
    with col_info:
        st.caption(f"Halaman {page.current_page} dari {max(page.last_page, 1)}")
    with col_next:
        if st.button(
            "Berikutnya ▶",
            use_container_width=True,
            disabled=page.current_page >= page.last_page,
            key=f"next_{kind}",
        ):
            st.session_state[page_key] = page.current_page + 1
            reset_editor(kind)
            st.rerun()


def _render_export(kind: str, df) -> None:
    with st.expander("Ekspor CSV", expanded=False):
        selected_only = st.checkbox(
            "Hanya baris yang dipilih",
            value=True,
            key=keys.scoped(kind, keys.EXPORT_SELECTED_ONLY),
        )
        payload = generate_csv_payload(df, kind, selected_only=selected_only)
        if payload is None:
            st.info("Tidak ada baris untuk diekspor.")
            return
        st.download_button(
            label=f"⬇️ Unduh {payload.file_name} ({payload.rows} baris)",
            data=payload.content,
            file_name=payload.file_name,
            mime="text/csv",
            use_container_width=True,
        )


def render_list_screen(kind: str, *, title: str, caption: str = "") -> None:
    """Render the list screen for *kind*."""

    info = RESOURCES[kind]
    st.subheader(title, divider=True)
    if caption:
        st.caption(caption)

    render_flash_messages()

    selection = get_selection(kind)
    status_options = list(TRANSITIONS.get(kind, {}).keys())
    filters = render_list_filters(kind, status_options)

    page_key = keys.scoped(kind, keys.PAGE)
    current_page = int(st.session_state.get(page_key, 1))

    try:
        page = fetch_page_cached(kind, current_page, filters.per_page, filters.q, filters.status)
    except Exception as exc:  # noqa: BLE001 - show message to user
        st.error(f"Gagal memuat data {info.label}: {exc}")
        st.stop()

    # Filters, paging and refetches all land here; drop rows that went away.
    selection.keep_only(page.ids)

    st.caption(page.label())

    df = build_list_dataframe(kind, page.items, selection)
    index_to_id = {idx: entity_id for idx, entity_id in enumerate(df[ID_COLUMN].tolist())}

    if df.empty:
        st.info("Tidak ada data untuk filter yang dipilih.")
    else:
        st.data_editor(
            df,
            key=keys.scoped(kind, keys.EDITOR),
            on_change=_capture_selection_edits,
            args=(kind, selection, index_to_id),
            hide_index=True,
            num_rows="fixed",
            use_container_width=True,
            disabled=[column for column in df.columns if column != SELECT_COLUMN],
            column_config={
                SELECT_COLUMN: st.column_config.CheckboxColumn("Pilih", help="Tandai untuk aksi massal."),
            },
        )

    toggle_col = st.columns([1.4, 5])[0]
    with toggle_col:
        if st.button("🔁 Pilih/lepas semua", use_container_width=True, disabled=df.empty, key=f"toggle_all_{kind}"):
            selection.toggle_all(page.ids)
            reset_editor(kind)
            st.rerun()

    _render_pagination(kind, page)

    states = states_by_id(page.items)
    eligible = eligible_for_delete(kind, selection.selected_ids, states)
    if render_bulk_actions_bar(kind, info.label, selection, page.ids, eligible_count=len(eligible)):
        try:
            with st.spinner("Menghapus data terpilih..."):
                run_with_client(kind, filters, lambda orch: orch.delete_selected(states))
        except Exception as exc:  # noqa: BLE001 - show message to user
            logger.exception("Bulk delete on %s failed", kind)
            st.error(f"Gagal menjalankan aksi massal: {exc}")
        else:
            reset_editor(kind)
            st.rerun()

    if has_lifecycle(kind):
        render_status_tools(kind, page, selection, filters)

    _render_export(kind, df)
