"""Content fetcher — lazily pulls text bodies for text and code files."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable

from phonedrop.config import settings
from phonedrop.dashboard.classifier import READABLE, classify
from phonedrop.errors import FetchFailed
from phonedrop.schemas.files import FileRecord

if TYPE_CHECKING:
    from phonedrop.dashboard.gateway import HttpGateway
    from phonedrop.dashboard.state import DashboardState

logger = logging.getLogger(__name__)

TRUNCATED_MARKER = "\n… (truncated)"


class ContentFetcher:
    """At most one fetch per address in flight; a cache hit skips the read.

    A failed fetch leaves the cache entry absent so the next pass retries,
    up to ``max_attempts`` tries per address (0 = no limit).
    """

    def __init__(
        self,
        gateway: HttpGateway,
        state: DashboardState,
        max_attempts: int | None = None,
        max_chars: int | None = None,
    ):
        self._gateway = gateway
        self._state = state
        self._max_attempts = settings.content_max_attempts if max_attempts is None else max_attempts
        self._max_chars = settings.content_max_chars if max_chars is None else max_chars
        self._inflight: dict[str, asyncio.Task] = {}
        self._attempts: dict[str, int] = {}

    def attempts(self, address: str) -> int:
        return self._attempts.get(address, 0)

    def gave_up(self, address: str) -> bool:
        return bool(self._max_attempts) and self.attempts(address) >= self._max_attempts

    def in_flight(self, address: str) -> bool:
        return address in self._inflight

    def needs_fetch(self, record: FileRecord) -> bool:
        if classify(record.display_name) not in READABLE:
            return False
        address = record.address
        return not (
            self._state.is_cached(address)
            or address in self._inflight
            or self.gave_up(address)
        )

    def ensure(self, snapshot: Iterable[FileRecord]) -> list[asyncio.Task]:
        """Start fetches for every readable record still missing a body."""
        started = []
        for record in snapshot:
            if not self.needs_fetch(record):
                continue
            task = asyncio.create_task(self.fetch(record))
            self._inflight[record.address] = task
            started.append(task)
        return started

    async def fetch(self, record: FileRecord) -> bool:
        address = record.address
        self._attempts[address] = self.attempts(address) + 1
        try:
            body = await self._gateway.read_text(address)
        except FetchFailed as e:
            if self.gave_up(address):
                logger.error(
                    "Giving up on %s after %d attempts: %s",
                    record.display_name, self.attempts(address), e,
                )
            else:
                logger.warning("Failed to fetch text for %s: %s", record.display_name, e)
            return False
        finally:
            self._inflight.pop(address, None)

        if self._max_chars and len(body) > self._max_chars:
            body = body[: self._max_chars] + TRUNCATED_MARKER
        self._state.cache_insert(address, body)
        return True

    async def drain(self) -> None:
        """Wait for every outstanding fetch to settle."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight.values()), return_exceptions=True)
