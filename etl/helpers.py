"""ETL helper functions - run statistics, watermarks, batching."""

import asyncio
import datetime as dt
from collections.abc import Coroutine, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from loguru import logger

from app.models import ParliamentSession
from app.repositories import SessionRepository
from parliament_client.errors import MissingSessionError

T = TypeVar("T")


@dataclass
class SyncStats:
    """Per-stage counters printed at the end of every run."""

    stage: str
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    unresolved: int = 0
    dropped: int = 0
    errors: int = 0

    def merge(self, other: "SyncStats") -> None:
        self.inserted += other.inserted
        self.updated += other.updated
        self.skipped += other.skipped
        self.unresolved += other.unresolved
        self.dropped += other.dropped
        self.errors += other.errors

    def __str__(self) -> str:
        return (
            f"{self.stage}: +{self.inserted} new, {self.updated} updated, {self.skipped} skipped, "
            f"{self.unresolved} unresolved, {self.dropped} dropped, {self.errors} errors"
        )


@dataclass
class RunReport:
    """Stats of every stage that ran, filled in as stages finish."""

    stages: list[SyncStats] = field(default_factory=list)
    fatal: str | None = None

    def add(self, stats: SyncStats) -> SyncStats:
        self.stages.append(stats)
        return stats

    @property
    def ok(self) -> bool:
        return self.fatal is None


@dataclass(frozen=True)
class Watermark:
    """Lower bound of an incremental window.

    ``latest`` is the newest stored vote date for the target and is
    exclusive; ``floor`` is the current session's start date and is
    inclusive, so votes dated on the first sitting day still load.
    """

    latest: dt.date | None = None
    floor: dt.date | None = None

    def admits(self, vote_date: dt.date) -> bool:
        if self.latest is not None and vote_date <= self.latest:
            return False
        return self.floor is None or vote_date >= self.floor

    @property
    def value(self) -> dt.date | None:
        dates = [d for d in (self.latest, self.floor) if d is not None]
        return max(dates) if dates else None


def watermark(latest: dt.date | None, session: ParliamentSession | None) -> Watermark:
    return Watermark(latest=latest, floor=session.start_date if session else None)


def require_session(sessions: SessionRepository) -> ParliamentSession:
    """Current session or MissingSessionError."""
    session = sessions.current()
    if session is None:
        raise MissingSessionError()
    return session


def batched(items: Sequence[T], size: int) -> Iterator[tuple[int, int, Sequence[T]]]:
    """Yield (batch_num, total_batches, batch)."""
    total = (len(items) + size - 1) // size
    for i in range(0, len(items), size):
        yield i // size + 1, total, items[i : i + size]


def log_batch(stage: str, batch_num: int, total: int) -> None:
    if total > 1:
        logger.info("{}: batch {}/{}", stage, batch_num, total)


async def gather_all(coros: Sequence[Coroutine[Any, Any, T]]) -> list[T]:
    """Run coroutines concurrently, results in input order.

    The first failure cancels the remaining tasks and is raised as is,
    not wrapped in an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]
