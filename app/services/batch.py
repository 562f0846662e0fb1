"""Bounded-concurrency executor used by the bulk actions.

A fixed number of asyncio workers share a cursor into the list of ids.
Each worker claims the next id, awaits the operation for it and records the
outcome before claiming again, so at most ``limit`` operations are in flight
and every id is processed exactly once.  Failures are collected, never
raised, so one failing id cannot stop the others.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Sequence, TypeVar, Union

from app.state.selection import EntityId

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "BatchOutcome",
    "Err",
    "FailedItem",
    "Ok",
    "Result",
    "run_with_concurrency",
]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Err:
    error: Any


Result = Union[Ok[Any], Err]


@dataclass(frozen=True)
class FailedItem:
    id: EntityId
    error: Any


@dataclass
class BatchOutcome:
    succeeded: List[EntityId] = field(default_factory=list)
    failed: List[FailedItem] = field(default_factory=list)

    @property
    def failed_ids(self) -> List[EntityId]:
        return [item.id for item in self.failed]

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


Operation = Callable[[EntityId], Awaitable[Any]]


async def _attempt(operation: Operation, entity_id: EntityId) -> Result:
    """Run *operation* for one id and turn whatever happens into a ``Result``."""

    try:
        value = await operation(entity_id)
    except Exception as exc:  # noqa: BLE001 - recorded as the item's failure
        return Err(exc)
    if isinstance(value, (Ok, Err)):
        return value
    return Ok(value)


async def run_with_concurrency(
    items: Sequence[EntityId],
    limit: int,
    operation: Operation,
) -> BatchOutcome:
    """Run *operation* over *items* with at most *limit* calls in flight."""

    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be an integer >= 1, got {limit!r}")

    ids = list(items)
    outcome = BatchOutcome()
    if not ids:
        return outcome

    cursor = 0

    async def worker() -> None:
        nonlocal cursor
        while cursor < len(ids):
            # Claim and advance without awaiting in between.
            entity_id = ids[cursor]
            cursor += 1
            result = await _attempt(operation, entity_id)
            if isinstance(result, Err):
                logger.warning("Batch item %r failed: %s", entity_id, result.error)
                outcome.failed.append(FailedItem(entity_id, result.error))
            else:
                outcome.succeeded.append(entity_id)

    workers = min(limit, len(ids))
    logger.debug("Running %d item(s) with %d worker(s)", len(ids), workers)
    await asyncio.gather(*(worker() for _ in range(workers)))
    return outcome
