"""Selection model shared by the list screens and the batch actions."""
from __future__ import annotations

import logging
from typing import Hashable, Iterable, List, Set

logger = logging.getLogger(__name__)

EntityId = Hashable

__all__ = ["EntityId", "SelectionStore"]


class SelectionStore:
    """Identifiers the operator has checked on one list screen.

    The store is owned by the screen and handed to the batch orchestrator by
    reference.  Whenever the visible rows change the screen calls
    :meth:`keep_only` so that the selection never refers to rows the operator
    can no longer see.

    While :attr:`frozen` is set (a batch is running) the operator-facing
    mutations are ignored; :meth:`keep_only` and :meth:`set_selected` keep
    working because the batch itself relies on them.
    """

    def __init__(self, ids: Iterable[EntityId] = ()) -> None:
        self._selected: Set[EntityId] = set(ids)
        self.frozen = False

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"SelectionStore({sorted(self._selected, key=str)!r})"

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def selected(self) -> frozenset:
        return frozenset(self._selected)

    @property
    def selected_ids(self) -> List[EntityId]:
        return list(self._selected)

    def is_selected(self, entity_id: EntityId) -> bool:
        return entity_id in self._selected

    def _ignored(self, operation: str) -> bool:
        if self.frozen:
            logger.debug("Ignoring %s while a batch action is running", operation)
        return self.frozen

    def toggle(self, entity_id: EntityId) -> None:
        if self._ignored("toggle"):
            return
        if entity_id in self._selected:
            self._selected.discard(entity_id)
        else:
            self._selected.add(entity_id)

    def toggle_all(self, visible_ids: Iterable[EntityId]) -> None:
        """Select every visible id, or deselect them all if they already are."""

        if self._ignored("toggle_all"):
            return
        visible = list(visible_ids)
        self.keep_only(visible)
        if visible and all(entity_id in self._selected for entity_id in visible):
            self._selected.difference_update(visible)
        else:
            self._selected.update(visible)

    def add_many(self, ids: Iterable[EntityId]) -> None:
        if self._ignored("add_many"):
            return
        self._selected.update(ids)

    def remove_many(self, ids: Iterable[EntityId]) -> None:
        if self._ignored("remove_many"):
            return
        self._selected.difference_update(ids)

    def keep_only(self, visible_ids: Iterable[EntityId]) -> None:
        """Drop every selected id that is not part of *visible_ids*."""

        if not self._selected:
            return
        self._selected.intersection_update(set(visible_ids))

    def set_selected(self, ids: Iterable[EntityId]) -> None:
        self._selected = set(ids)

    def clear(self) -> None:
        if self._ignored("clear"):
            return
        self._selected.clear()
