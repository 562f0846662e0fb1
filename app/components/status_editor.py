"""Status tools for the kinds that have a lifecycle."""
from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, List, Mapping

import httpx
import streamlit as st

from app.components.batch_runner import run_with_api, run_with_client
from app.components.bulk_actions import disarm, render_two_step_button, reset_editor
from app.components.forms import ListFilters
from app.components.notifications import StreamlitNotifier
from app.models.lifecycle import allowed_transitions, is_deletable, is_locked, normalise_status, status_label
from app.repositories.entities_repo import Page, delete_entity, fetch_entity, patch_entity_status
from app.services.batch_actions import Notifier, eligible_for_status
from app.services.status_service import change_status, delete_one
from app.state import session_keys as keys
from app.state.selection import EntityId, SelectionStore
from app.utils.cache import clear_pages_cache
from app.utils.constants import STATUS_METADATA_FIELDS, TRANSITIONS

logger = logging.getLogger(__name__)

_METADATA_LABELS = {
    "paid_at": "Tanggal bayar (YYYY-MM-DD)",
    "notes": "Catatan",
    "assigned_officer": "Petugas",
    "admin_notes": "Catatan admin",
}


async def save_row_status(
    client: httpx.AsyncClient,
    kind: str,
    entity_id: EntityId,
    new_state: str,
    metadata: Mapping[str, Any] | None,
    notifier: Notifier,
) -> bool:
    """Reload the row's current status from the API, then change it."""

    entity = await fetch_entity(client, kind, entity_id)
    return await change_status(
        kind,
        entity_id,
        entity.get("status"),
        new_state,
        metadata,
        patch=partial(patch_entity_status, client, kind),
        notifier=notifier,
    )


async def delete_row(client: httpx.AsyncClient, kind: str, entity_id: EntityId, notifier: Notifier) -> bool:
    """Reload the row's current status from the API, then delete it if still allowed."""

    entity = await fetch_entity(client, kind, entity_id)
    return await delete_one(
        kind,
        entity_id,
        entity.get("status"),
        remove=partial(delete_entity, client, kind),
        notifier=notifier,
    )


def _row_caption(kind: str, item: Dict[str, Any]) -> str:
    name = item.get("donor_name") or item.get("name") or item.get("donation_code") or ""
    return f"#{item['id']} {name} • {status_label(kind, item.get('status'))}"


def _metadata_inputs(kind: str, prefix: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for field in STATUS_METADATA_FIELDS.get(kind, ()):
        values[field] = st.text_input(_METADATA_LABELS.get(field, field), key=f"{prefix}_{kind}_{field}")
    return values


def _run_row_action(kind: str, action, failure: str) -> None:
    try:
        run_with_api(action)
    except Exception as exc:  # noqa: BLE001 - show message to user
        logger.exception("Single-row action on %s failed", kind)
        st.error(f"{failure}: {exc}")
    else:
        clear_pages_cache()
        reset_editor(kind)
        st.rerun()


def _render_row_delete(kind: str, entity_id: EntityId, current: str) -> None:
    confirm_key = keys.scoped(kind, keys.ROW_DELETE_CONFIRMING)
    if st.session_state.get(f"{confirm_key}_id") != entity_id:
        disarm(confirm_key)
        st.session_state[f"{confirm_key}_id"] = entity_id

    deletable = is_deletable(kind, current)
    if not deletable:
        st.caption("Hanya data berstatus awal yang dapat dihapus.")
    if render_two_step_button(
        confirm_key,
        "🗑️ Hapus",
        f"🗑️ Konfirmasi hapus #{entity_id}",
        button_key=f"row_delete_{kind}",
        disabled=not deletable,
    ):
        notifier = StreamlitNotifier()
        _run_row_action(
            kind,
            lambda client: delete_row(client, kind, entity_id, notifier),
            "Gagal menghapus data",
        )


def _render_single_row(kind: str, page: Page) -> None:
    items: List[Dict[str, Any]] = [item for item in page.items if "id" in item]
    if not items:
        return

    by_id = {item["id"]: item for item in items}
    entity_id = st.selectbox(
        "Data",
        options=list(by_id),
        format_func=lambda v: _row_caption(kind, by_id[v]),
        key=f"status_row_{kind}",
    )
    current = normalise_status(by_id[entity_id].get("status"))
    options = allowed_transitions(kind, current)

    if is_locked(kind, current) or not options:
        st.info(f"Status {status_label(kind, current)} sudah terkunci.")
    else:
        new_state = st.selectbox(
            "Status baru",
            options=list(options),
            format_func=lambda v: status_label(kind, v),
            key=f"status_new_{kind}",
        )
        metadata = _metadata_inputs(kind, "single")

        if st.button("💾 Simpan status", type="primary", key=f"status_save_{kind}"):
            notifier = StreamlitNotifier()
            _run_row_action(
                kind,
                lambda client: save_row_status(client, kind, entity_id, new_state, metadata, notifier),
                "Gagal memperbarui status",
            )

    _render_row_delete(kind, entity_id, current)


def _render_bulk_status(kind: str, page: Page, selection: SelectionStore, filters: ListFilters) -> None:
    if selection.count <= 0:
        st.caption("Pilih data pada tabel untuk mengubah status secara massal.")
        return

    targets = sorted({target for successors in TRANSITIONS[kind].values() for target in successors})
    new_state = st.selectbox(
        "Status baru untuk data terpilih",
        options=targets,
        format_func=lambda v: status_label(kind, v),
        key=keys.scoped(kind, keys.STATUS_TARGET),
    )
    metadata = _metadata_inputs(kind, "bulk")
    states = {item["id"]: item.get("status") for item in page.items if "id" in item}
    eligible = eligible_for_status(kind, selection.selected_ids, new_state, states)

    if len(eligible) < selection.count:
        st.caption(f"{selection.count - len(eligible)} data tidak dapat diubah ke {status_label(kind, new_state)}.")

    if render_two_step_button(
        keys.scoped(kind, keys.STATUS_CONFIRMING),
        f"⚙️ Terapkan ke {len(eligible)} data",
        f"⚙️ Konfirmasi: {len(eligible)} data menjadi {status_label(kind, new_state)}",
        button_key=f"bulk_status_{kind}",
        disabled=not eligible,
    ):
        try:
            with st.spinner("Memperbarui status..."):
                run_with_client(kind, filters, lambda orch: orch.patch_selected_status(new_state, metadata, states))
        except Exception as exc:  # noqa: BLE001 - show message to user
            logger.exception("Bulk status update on %s failed", kind)
            st.error(f"Gagal menjalankan aksi massal: {exc}")
        else:
            reset_editor(kind)
            st.rerun()


def render_status_tools(kind: str, page: Page, selection: SelectionStore, filters: ListFilters) -> None:
    st.subheader("Status", divider=True)
    single, bulk = st.tabs(["Satu data", "Data terpilih"])
    with single:
        _render_single_row(kind, page)
    with bulk:
        _render_bulk_status(kind, page, selection, filters)
