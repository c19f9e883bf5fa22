"""Dashboard state container — snapshot, content cache and refresh toggle."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from phonedrop.schemas.files import FileRecord

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class DashboardState:
    """Single owner of everything the dashboard displays.

    Write paths: ``replace_snapshot`` (poller), ``cache_insert`` (content
    fetcher), ``set_auto_refresh`` (toggle) and ``mark_loaded``.
    """

    def __init__(self, auto_refresh: bool = True):
        self._snapshot: tuple[FileRecord, ...] = ()
        self._snapshot_seq = 0
        self._loading = True
        self._auto_refresh = auto_refresh
        self._content: dict[str, str] = {}
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> tuple[FileRecord, ...]:
        return self._snapshot

    @property
    def snapshot_seq(self) -> int:
        """Issue sequence number of the poll that produced the current snapshot."""
        return self._snapshot_seq

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    def addresses(self) -> set[str]:
        return {r.address for r in self._snapshot}

    def replace_snapshot(self, records: Iterable[FileRecord], issued_seq: int = 0) -> None:
        """Replace, never merge. The last completed poll wins."""
        self._snapshot = tuple(records)
        self._snapshot_seq = issued_seq
        self._loading = False
        self._notify()

    def mark_loaded(self) -> None:
        if self._loading:
            self._loading = False
            self._notify()

    def content_for(self, address: str) -> str | None:
        return self._content.get(address)

    def is_cached(self, address: str) -> bool:
        return address in self._content

    def cache_insert(self, address: str, body: str) -> bool:
        """Store a fetched body. Existing entries are never overwritten."""
        if address in self._content:
            return False
        self._content[address] = body
        self._notify()
        return True

    def set_auto_refresh(self, enabled: bool) -> None:
        if enabled == self._auto_refresh:
            return
        self._auto_refresh = enabled
        logger.info("Auto-refresh %s", "enabled" if enabled else "disabled")
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.error("State listener failed: %s", e)
