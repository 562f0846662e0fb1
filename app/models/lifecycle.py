"""Status lifecycle rules for the entities managed in the back-office.

The authoritative status lives on the server.  The helpers below only decide
what the admin surface may attempt, using a single table keyed by
``(kind, state)`` instead of per-screen if/else chains.  Anything the table
does not know about is treated as locked.
"""
from __future__ import annotations

from typing import Tuple

from app.utils.constants import (
    INITIAL_STATUS,
    NEUTRAL_TONE,
    RESTRICTED_EDITABLE,
    STATUS_LABELS,
    STATUS_TONES,
    TRANSITIONS,
)

__all__ = [
    "IneligibleMutationError",
    "allowed_transitions",
    "can_transition",
    "ensure_mutable",
    "has_lifecycle",
    "is_deletable",
    "is_editable",
    "is_locked",
    "normalise_status",
    "status_label",
    "status_tone",
]


class IneligibleMutationError(Exception):
    """Raised when an edit or delete targets a locked lifecycle state."""

    def __init__(self, kind: str, state: str | None, action: str = "ubah") -> None:
        self.kind = kind
        self.state = normalise_status(state)
        self.action = action
        shown = self.state or "-"
        super().__init__(f"Data berstatus '{shown}' sudah terkunci dan tidak dapat di{action}.")


def normalise_status(value: object) -> str:
    """Return *value* as a trimmed, lower-case status string ("" for ``None``)."""

    if value is None:
        return ""
    return str(value).strip().lower()


def has_lifecycle(kind: str) -> bool:
    return kind in TRANSITIONS


def is_deletable(kind: str, state: object) -> bool:
    """Only the initial, non-locked state of a kind may be deleted."""

    initial = INITIAL_STATUS.get(kind)
    return initial is not None and normalise_status(state) == initial


def is_editable(kind: str, state: object) -> bool:
    """Return ``True`` when the admin surface may still change the entity.

    Besides the initial state, a kind may expose restricted states that can
    only move to an allow-listed successor (a scheduled pickup may only be
    completed).
    """

    if is_deletable(kind, state):
        return True
    return normalise_status(state) in RESTRICTED_EDITABLE.get(kind, {})


def is_locked(kind: str, state: object) -> bool:
    return not is_editable(kind, state)


def allowed_transitions(kind: str, state: object) -> Tuple[str, ...]:
    """Statuses the admin surface may offer as the next state."""

    current = normalise_status(state)
    restricted = RESTRICTED_EDITABLE.get(kind, {})
    if current in restricted:
        return restricted[current]
    if not is_deletable(kind, current):
        return ()
    return TRANSITIONS[kind].get(current, ())


def can_transition(kind: str, current: object, new: object) -> bool:
    return normalise_status(new) in allowed_transitions(kind, current)


def ensure_mutable(kind: str, state: object, action: str = "ubah") -> None:
    """Raise :class:`IneligibleMutationError` unless *state* is still open.

    ``action="hapus"`` checks deletability, any other action editability.
    """

    allowed = is_deletable(kind, state) if action == "hapus" else is_editable(kind, state)
    if not allowed:
        raise IneligibleMutationError(kind, normalise_status(state), action)


def status_label(kind: str, state: object) -> str:
    current = normalise_status(state)
    return STATUS_LABELS.get((kind, current), current or "-")


def status_tone(kind: str, state: object) -> str:
    return STATUS_TONES.get((kind, normalise_status(state)), NEUTRAL_TONE)
