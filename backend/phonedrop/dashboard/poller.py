"""Listing poller — timer-driven and manual snapshot fetches."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from phonedrop.config import settings
from phonedrop.errors import StoreUnavailable
from phonedrop.schemas.files import FileRecord

if TYPE_CHECKING:
    from phonedrop.dashboard.gateway import HttpGateway
    from phonedrop.dashboard.state import DashboardState

logger = logging.getLogger(__name__)

SnapshotHook = Callable[[tuple[FileRecord, ...]], object]


def order_snapshot(records: list[FileRecord]) -> tuple[FileRecord, ...]:
    """Newest first, one entry per address."""
    seen: set[str] = set()
    ordered = []
    for record in sorted(records, key=lambda r: r.uploaded_at, reverse=True):
        if record.address in seen:
            continue
        seen.add(record.address)
        ordered.append(record)
    return tuple(ordered)


class ListingPoller:
    """Keeps ``DashboardState.snapshot`` in step with the server listing.

    One interval job drives the timer; every tick and every manual refresh
    spawns its own fetch task, so requests may overlap. Results are applied
    in completion order.
    """

    JOB_ID = "poll_listing"

    def __init__(
        self,
        gateway: HttpGateway,
        state: DashboardState,
        interval: float | None = None,
        on_snapshot: SnapshotHook | None = None,
    ):
        self._gateway = gateway
        self._state = state
        self._interval = interval or settings.poll_interval_seconds
        self._on_snapshot = on_snapshot
        self._scheduler = AsyncIOScheduler(
            job_defaults={"coalesce": True, "max_instances": 1}
        )
        self._tasks: set[asyncio.Task] = set()
        self._issued = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def timer_active(self) -> bool:
        """True when the timer job has a next run scheduled."""
        job = self._scheduler.get_job(self.JOB_ID)
        return job is not None and job.next_run_time is not None

    @property
    def outstanding(self) -> int:
        return len(self._tasks)

    async def start(self) -> None:
        """Register the timer job and do the initial fetch."""
        if self._scheduler.running:
            return
        kwargs = {}
        if not self._state.auto_refresh:
            kwargs["next_run_time"] = None  # added paused
        self._scheduler.add_job(
            self._tick,
            "interval",
            seconds=self._interval,
            id=self.JOB_ID,
            name="Poll file listing",
            **kwargs,
        )
        self._scheduler.start()
        logger.info(
            "Listing poller started — every %.1fs (auto-refresh %s)",
            self._interval,
            "on" if self._state.auto_refresh else "off",
        )
        await self.poll_once()

    async def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Listing poller stopped")
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def set_enabled(self, enabled: bool) -> None:
        """Pause or resume timer-driven polls; in-flight fetches are left alone."""
        self._state.set_auto_refresh(enabled)
        if self._scheduler.get_job(self.JOB_ID) is None:
            return
        if enabled:
            self._scheduler.resume_job(self.JOB_ID)
        else:
            self._scheduler.pause_job(self.JOB_ID)

    def refresh(self) -> asyncio.Task:
        """Manual fetch, independent of the timer phase."""
        return self._spawn()

    async def _tick(self) -> None:
        self._spawn()

    def _spawn(self) -> asyncio.Task:
        task = asyncio.create_task(self._guarded_poll())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guarded_poll(self) -> bool:
        try:
            return await self.poll_once()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Listing poll crashed: %s", e)
            return False

    async def poll_once(self) -> bool:
        """Fetch the listing and replace the snapshot. False keeps the old one."""
        self._issued += 1
        seq = self._issued
        try:
            records = await self._gateway.list()
        except StoreUnavailable as e:
            logger.error("Failed to fetch files: %s", e)
            self._state.mark_loaded()
            return False

        snapshot = order_snapshot(records)
        if seq < self._state.snapshot_seq:
            logger.debug("Poll #%d completed after #%d; applying anyway", seq, self._state.snapshot_seq)
        self._state.replace_snapshot(snapshot, issued_seq=seq)
        logger.debug("Snapshot #%d: %d files", seq, len(snapshot))

        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)
        return True
