"""Single-row mutations gated by the lifecycle rules."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from app.models.lifecycle import (
    IneligibleMutationError,
    can_transition,
    ensure_mutable,
    has_lifecycle,
    status_label,
)
from app.services.batch import Err
from app.services.batch_actions import Notifier, PatchOperation, RemoveOperation
from app.state.selection import EntityId

logger = logging.getLogger(__name__)


async def change_status(
    kind: str,
    entity_id: EntityId,
    current_state: Any,
    new_state: str,
    metadata: Mapping[str, Any] | None,
    *,
    patch: PatchOperation,
    notifier: Notifier,
) -> bool:
    """Send a status update unless the lifecycle forbids it.

    A forbidden change is reported as a warning and no request is made.
    """

    try:
        ensure_mutable(kind, current_state)
        if not can_transition(kind, current_state, new_state):
            raise IneligibleMutationError(kind, current_state)
    except IneligibleMutationError as exc:
        logger.info("Rejected status change of %s %r: %s", kind, entity_id, exc)
        notifier.warning(str(exc))
        return False

    result = await patch(entity_id, new_state, dict(metadata or {}))
    if isinstance(result, Err):
        notifier.error(f"Gagal memperbarui status: {result.error}")
        return False
    notifier.success(f"Status diperbarui menjadi {status_label(kind, new_state)}.")
    return True


async def delete_one(
    kind: str,
    entity_id: EntityId,
    current_state: Any,
    *,
    remove: RemoveOperation,
    notifier: Notifier,
) -> bool:
    try:
        if has_lifecycle(kind):
            ensure_mutable(kind, current_state, action="hapus")
    except IneligibleMutationError as exc:
        logger.info("Rejected delete of %s %r: %s", kind, entity_id, exc)
        notifier.warning(str(exc))
        return False

    result = await remove(entity_id)
    if isinstance(result, Err):
        notifier.error(f"Gagal menghapus data: {result.error}")
        return False
    notifier.success("Data berhasil dihapus.")
    return True
