"""Central place for Streamlit session state keys used across pages."""
from __future__ import annotations

# Global reset flag used when the operator wants to restart every screen.
FULL_RESET_FLAG = "_do_full_reset"

# Messages queued by a batch action, shown after the rerun.
FLASH_MESSAGES = "flash_messages"

# Per-screen keys; each list screen prefixes them with its entity kind.
SELECTION = "selection"
PAGE = "page"
PER_PAGE = "per_page"
SEARCH_FILTER = "f_q"
STATUS_FILTER = "f_status"
FILTER_RESET = "reset_filters"
EDITOR = "editor"
CONFIRMING = "confirming_delete"
STATUS_CONFIRMING = "confirming_status"
ROW_DELETE_CONFIRMING = "confirming_row_delete"
STATUS_TARGET = "status_target"
EXPORT_SELECTED_ONLY = "export_selected_only"


def scoped(kind: str, key: str) -> str:
    """Return the session key *key* for the list screen of *kind*."""

    return f"{kind}:{key}"
