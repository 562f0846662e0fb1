"""Bar shown above a list while rows are selected."""
from __future__ import annotations

from typing import Optional, Sequence

import streamlit as st

from app.state import session_keys as keys
from app.state.selection import EntityId, SelectionStore


def reset_editor(kind: str) -> None:
    """Drop the data editor state so it is rebuilt from the selection."""

    editor_key = keys.scoped(kind, keys.EDITOR)
    if editor_key in st.session_state:
        del st.session_state[editor_key]


def disarm(confirm_key: str) -> None:
    st.session_state[confirm_key] = False


def render_two_step_button(
    confirm_key: str,
    arm_label: str,
    confirm_label: str,
    *,
    button_key: str,
    disabled: bool = False,
) -> bool:
    """First click arms the action, the second one (on the next run) fires it.

    Returns ``True`` only on the confirming click.
    """

    if not st.session_state.get(confirm_key, False):
        if st.button(arm_label, use_container_width=True, disabled=disabled, key=f"{button_key}_arm"):
            st.session_state[confirm_key] = True
            st.rerun()
        return False

    if st.button(
        confirm_label,
        type="primary",
        use_container_width=True,
        disabled=disabled,
        key=f"{button_key}_confirm",
    ):
        disarm(confirm_key)
        return True
    return False


def render_bulk_actions_bar(
    kind: str,
    item_label: str,
    selection: SelectionStore,
    visible_ids: Sequence[EntityId],
    *,
    eligible_count: Optional[int] = None,
    disabled: bool = False,
) -> bool:
    """Render the bar and return ``True`` once deletion is confirmed.

    *eligible_count* is the number of selected rows the lifecycle still lets
    us delete; locked rows are left out of the confirmation label.
    """

    if selection.count <= 0:
        return False

    confirm_key = keys.scoped(kind, keys.CONFIRMING)
    deletable = selection.count if eligible_count is None else eligible_count

    with st.container(border=True):
        info, act_all, act_clear, act_delete = st.columns([2.4, 1.4, 1.2, 1.6])
        with info:
            st.markdown(f"**{selection.count} {item_label} dipilih**")
            if deletable < selection.count:
                st.caption(f"{selection.count - deletable} terkunci, hanya {deletable} yang akan dihapus.")
            else:
                st.caption("Kamu bisa hapus banyak data tanpa pindah halaman.")
        with act_all:
            if st.button("☑️ Pilih semua (halaman)", use_container_width=True, disabled=disabled, key=f"bulk_all_{kind}"):
                selection.add_many(visible_ids)
                reset_editor(kind)
                st.rerun()
        with act_clear:
            if st.button("✖️ Batalkan", use_container_width=True, disabled=disabled, key=f"bulk_clear_{kind}"):
                disarm(confirm_key)
                selection.clear()
                reset_editor(kind)
                st.rerun()
        with act_delete:
            return render_two_step_button(
                confirm_key,
                f"🗑️ Hapus dipilih ({deletable})",
                f"🗑️ Konfirmasi hapus {deletable} {item_label}",
                button_key=f"bulk_delete_{kind}",
                disabled=disabled or deletable <= 0,
            )
