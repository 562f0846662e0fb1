"""Bulk delete / bulk status update for the list screens.

:class:`BatchActionOrchestrator` ties a screen's :class:`SelectionStore` to
the concurrency-limited executor and the lifecycle rules:

1. an empty selection is a no-op;
2. ids whose status is locked are skipped before any request is sent;
3. the operator may be asked to confirm;
4. the selection is frozen while the batch runs;
5. failed ids stay selected for a retry, otherwise the selection is cleared;
6. the list is always re-fetched and the selection reconciled against it.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Protocol

from app.models.lifecycle import can_transition, has_lifecycle, is_deletable
from app.services.batch import BatchOutcome, run_with_concurrency
from app.state.selection import EntityId, SelectionStore
from app.utils.constants import RESOURCES

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


class Notifier(Protocol):
    """User-facing notification channel."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


RemoveOperation = Callable[[EntityId], Awaitable[Any]]
PatchOperation = Callable[[EntityId, str, Mapping[str, Any]], Awaitable[Any]]
Refetch = Callable[[], Awaitable[Iterable[EntityId]]]
Confirm = Callable[[str], bool]


def eligible_for_delete(kind: str, ids: Iterable[EntityId], states: Mapping[EntityId, Any] | None) -> List[EntityId]:
    """Filter *ids* down to the ones whose status still allows deletion.

    Kinds without a lifecycle are always eligible.  For the others an id
    with no known status is treated as locked.
    """

    ids = list(ids)
    if not has_lifecycle(kind):
        return ids
    states = states or {}
    return [entity_id for entity_id in ids if is_deletable(kind, states.get(entity_id))]


def eligible_for_status(
    kind: str,
    ids: Iterable[EntityId],
    new_state: str,
    states: Mapping[EntityId, Any] | None,
) -> List[EntityId]:
    states = states or {}
    return [entity_id for entity_id in ids if can_transition(kind, states.get(entity_id), new_state)]


class BatchActionOrchestrator:
    def __init__(
        self,
        selection: SelectionStore,
        kind: str,
        *,
        remove: RemoveOperation,
        refetch: Refetch,
        notifier: Notifier,
        confirm: Optional[Confirm] = None,
        patch: Optional[PatchOperation] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self.selection = selection
        self.kind = kind
        self.remove = remove
        self.patch = patch
        self.refetch = refetch
        self.notifier = notifier
        self.confirm = confirm
        self.concurrency = concurrency
        self.busy = False

    @property
    def item_label(self) -> str:
        info = RESOURCES.get(self.kind)
        return info.label if info else "data"

    def eligible_for_delete(self, ids: Iterable[EntityId], states: Mapping[EntityId, Any] | None) -> List[EntityId]:
        return eligible_for_delete(self.kind, ids, states)

    def eligible_for_status(
        self,
        ids: Iterable[EntityId],
        new_state: str,
        states: Mapping[EntityId, Any] | None,
    ) -> List[EntityId]:
        return eligible_for_status(self.kind, ids, new_state, states)

    async def delete_selected(self, states: Mapping[EntityId, Any] | None = None) -> Optional[BatchOutcome]:
        """Delete every eligible selected id; ``None`` when nothing ran."""

        requested = self.selection.selected_ids
        if not requested:
            return None
        eligible = self.eligible_for_delete(requested, states)
        return await self._run(
            requested,
            eligible,
            self.remove,
            prompt=f"Hapus {len(eligible)} {self.item_label} terpilih?",
            done=lambda n: f"Berhasil menghapus {n} {self.item_label}.",
            partial=lambda ok, ko: f"Berhasil menghapus {ok}, gagal {ko}.",
        )

    async def patch_selected_status(
        self,
        new_state: str,
        metadata: Mapping[str, Any] | None = None,
        states: Mapping[EntityId, Any] | None = None,
    ) -> Optional[BatchOutcome]:
        """Move every eligible selected id to *new_state*."""

        if self.patch is None:
            raise RuntimeError(f"No status operation configured for {self.kind!r}")
        requested = self.selection.selected_ids
        if not requested:
            return None
        eligible = self.eligible_for_status(requested, new_state, states)
        patch = self.patch
        extra = dict(metadata or {})

        async def operation(entity_id: EntityId) -> Any:
            return await patch(entity_id, new_state, extra)

        return await self._run(
            requested,
            eligible,
            operation,
            prompt=f"Ubah status {len(eligible)} {self.item_label} menjadi '{new_state}'?",
            done=lambda n: f"Berhasil memperbarui status {n} {self.item_label}.",
            partial=lambda ok, ko: f"Berhasil memperbarui {ok}, gagal {ko}.",
        )

    async def _run(
        self,
        requested: List[EntityId],
        eligible: List[EntityId],
        operation: RemoveOperation,
        *,
        prompt: str,
        done: Callable[[int], str],
        partial: Callable[[int, int], str],
    ) -> Optional[BatchOutcome]:
        if self.busy:
            self.notifier.warning("Aksi massal masih berjalan. Tunggu hingga selesai.")
            return None

        skipped = len(requested) - len(eligible)
        if eligible and self.confirm is not None and not self.confirm(prompt):
            return None

        if skipped:
            logger.info("Skipping %d locked %s item(s)", skipped, self.kind)
            self.notifier.warning(f"{skipped} {self.item_label} berstatus terkunci dan dilewati.")
        if not eligible:
            return None

        self.busy = True
        self.selection.frozen = True
        try:
            logger.info("Batch on %s started for %d item(s)", self.kind, len(eligible))
            outcome = await run_with_concurrency(eligible, self.concurrency, operation)
            logger.info(
                "Batch on %s finished: %d succeeded, %d failed",
                self.kind,
                len(outcome.succeeded),
                len(outcome.failed),
            )

            if outcome.failed:
                self.selection.set_selected(outcome.failed_ids)
                self.notifier.error(partial(len(outcome.succeeded), len(outcome.failed)))
            else:
                self.selection.set_selected(())
                self.notifier.success(done(len(outcome.succeeded)))

            await self._reload()
            return outcome
        finally:
            self.selection.frozen = False
            self.busy = False

    async def _reload(self) -> None:
        try:
            visible_ids = await self.refetch()
        except Exception as exc:  # noqa: BLE001 - reported apart from the item outcomes
            logger.exception("Refetch after batch on %s failed", self.kind)
            self.notifier.error(f"Gagal memuat ulang data: {exc}")
            return
        self.selection.keep_only(visible_ids)
