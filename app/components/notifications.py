"""Notification channel backed by Streamlit."""
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from app.state import session_keys as keys

_ICONS = {"success": "✅", "error": "⚠️", "warning": "🔒"}


class StreamlitNotifier:
    """Queue messages in the session so they survive the ``st.rerun()``
    that follows a batch action; :func:`render_flash_messages` shows them.
    """

    def _push(self, severity: str, message: str) -> None:
        queue: List[Tuple[str, str]] = st.session_state.setdefault(keys.FLASH_MESSAGES, [])
        queue.append((severity, message))

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def warning(self, message: str) -> None:
        self._push("warning", message)


def render_flash_messages() -> None:
    """Show and drop every queued message."""

    queue = st.session_state.pop(keys.FLASH_MESSAGES, None) or []
    for severity, message in queue:
        icon = _ICONS.get(severity)
        if severity == "success":
            st.success(message, icon=icon)
        elif severity == "error":
            st.error(message, icon=icon)
        else:
            st.warning(message, icon=icon)
        st.toast(message, icon=icon)
