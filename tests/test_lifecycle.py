from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.models import lifecycle
from app.models.lifecycle import IneligibleMutationError
from app.utils.constants import INITIAL_STATUS, TRANSITIONS, EntityKind

LIFECYCLE_KINDS = [EntityKind.DONATION, EntityKind.PICKUP_REQUEST, EntityKind.CONSULTATION]


@pytest.mark.parametrize("kind", LIFECYCLE_KINDS)
def test_only_the_initial_state_is_deletable(kind):
    for state in TRANSITIONS[kind]:
        assert lifecycle.is_deletable(kind, state) is (state == INITIAL_STATUS[kind])


@pytest.mark.parametrize("kind", LIFECYCLE_KINDS)
@pytest.mark.parametrize("state", ["", None, "unknown", "PAID?", "selesai!", "archived"])
def test_unknown_states_are_locked(kind, state):
    assert lifecycle.is_deletable(kind, state) is False
    assert lifecycle.is_editable(kind, state) is False
    assert lifecycle.allowed_transitions(kind, state) == ()


def test_states_are_normalised():
    assert lifecycle.is_deletable(EntityKind.DONATION, "  Pending ")
    assert lifecycle.is_deletable(EntityKind.PICKUP_REQUEST, "BARU")


def test_unknown_kind_is_locked():
    assert lifecycle.is_deletable("banner", "baru") is False
    assert lifecycle.is_editable("banner", "baru") is False
    assert lifecycle.has_lifecycle("banner") is False


@pytest.mark.parametrize("state", ["paid", "failed", "expired", "cancelled"])
def test_settled_donations_are_locked(state):
    assert lifecycle.is_deletable(EntityKind.DONATION, state) is False
    assert lifecycle.is_editable(EntityKind.DONATION, state) is False
    assert lifecycle.is_locked(EntityKind.DONATION, state) is True


def test_scheduled_pickup_can_only_be_completed():
    kind = EntityKind.PICKUP_REQUEST

    assert lifecycle.is_editable(kind, "dijadwalkan") is True
    assert lifecycle.is_deletable(kind, "dijadwalkan") is False
    assert lifecycle.allowed_transitions(kind, "dijadwalkan") == ("selesai",)
    assert lifecycle.can_transition(kind, "dijadwalkan", "selesai") is True
    assert lifecycle.can_transition(kind, "dijadwalkan", "baru") is False
    assert lifecycle.can_transition(kind, "dijadwalkan", "dibatalkan") is False


def test_new_pickup_transitions():
    kind = EntityKind.PICKUP_REQUEST

    assert set(lifecycle.allowed_transitions(kind, "baru")) == {"dijadwalkan", "selesai", "dibatalkan"}
    assert lifecycle.allowed_transitions(kind, "selesai") == ()
    assert lifecycle.allowed_transitions(kind, "dibatalkan") == ()


def test_consultation_transitions():
    kind = EntityKind.CONSULTATION

    assert set(lifecycle.allowed_transitions(kind, "baru")) == {"dibalas", "ditutup"}
    assert lifecycle.is_editable(kind, "dibalas") is False
    assert lifecycle.is_editable(kind, "ditutup") is False


def test_ensure_mutable_raises_for_locked_states():
    lifecycle.ensure_mutable(EntityKind.DONATION, "pending", action="hapus")

    with pytest.raises(IneligibleMutationError) as exc_info:
        lifecycle.ensure_mutable(EntityKind.DONATION, "paid", action="hapus")

    assert exc_info.value.state == "paid"
    assert "dihapus" in str(exc_info.value)


def test_ensure_mutable_edit_allows_scheduled_pickup():
    lifecycle.ensure_mutable(EntityKind.PICKUP_REQUEST, "dijadwalkan")

    with pytest.raises(IneligibleMutationError):
        lifecycle.ensure_mutable(EntityKind.PICKUP_REQUEST, "dijadwalkan", action="hapus")


def test_labels_and_tones_come_from_one_table():
    assert lifecycle.status_label(EntityKind.DONATION, "paid") == "🟢 Lunas"
    assert lifecycle.status_label(EntityKind.PICKUP_REQUEST, "dijadwalkan") == "🔵 Dijadwalkan"
    assert lifecycle.status_label(EntityKind.CONSULTATION, "weird") == "weird"
    assert lifecycle.status_label(EntityKind.CONSULTATION, None) == "-"
    assert lifecycle.status_tone(EntityKind.DONATION, "weird") == "#F1F5F9"
