from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.state import session
from app.state import session_keys as keys
from app.state.selection import SelectionStore


class _FakeStreamlit(SimpleNamespace):
    def __init__(self) -> None:
        super().__init__(session_state={}, rerun_called=False)

    def rerun(self) -> None:  # pragma: no cover - invoked indirectly
        self.rerun_called = True


def test_trigger_full_reset_sets_flag(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(session, "st", fake_st)

    session.trigger_full_reset()

    assert fake_st.session_state[keys.FULL_RESET_FLAG] is True


def test_handle_full_reset_clears_state_and_reruns(monkeypatch):
    fake_st = _FakeStreamlit()
    fake_st.session_state[keys.FULL_RESET_FLAG] = True
    fake_st.session_state[keys.scoped("donation", keys.SELECTION)] = SelectionStore([1, 2])
    monkeypatch.setattr(session, "st", fake_st)

    session.handle_full_reset()

    assert fake_st.session_state == {keys.FULL_RESET_FLAG: False}
    assert fake_st.rerun_called is True


def test_handle_full_reset_no_flag(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(session, "st", fake_st)

    session.handle_full_reset()

    assert fake_st.session_state == {}
    assert fake_st.rerun_called is False


def test_get_selection_creates_one_store_per_screen(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(session, "st", fake_st)

    donations = session.get_selection("donation")
    donations.toggle(7)

    assert session.get_selection("donation") is donations
    assert session.get_selection("pickup_request") is not donations
    assert session.get_selection("pickup_request").count == 0
    assert fake_st.session_state[keys.scoped("donation", keys.SELECTION)].selected_ids == [7]


def test_get_selection_replaces_foreign_values(monkeypatch):
    fake_st = _FakeStreamlit()
    fake_st.session_state[keys.scoped("donation", keys.SELECTION)] = {"7": True}
    monkeypatch.setattr(session, "st", fake_st)

    store = session.get_selection("donation")

    assert isinstance(store, SelectionStore)
    assert store.count == 0
