"""Dashboard session — wires gateway, state, poller, fetcher and deleter."""

from __future__ import annotations

import asyncio
import logging

from phonedrop.dashboard.content import ContentFetcher
from phonedrop.dashboard.deletion import Confirm, DeletionController, deny
from phonedrop.dashboard.gateway import HttpGateway
from phonedrop.dashboard.poller import ListingPoller
from phonedrop.dashboard.render import DashboardView, build_view
from phonedrop.dashboard.state import DashboardState

logger = logging.getLogger(__name__)


class DashboardSession:
    """One running dashboard. Content cache lives as long as the session."""

    def __init__(
        self,
        gateway: HttpGateway | None = None,
        confirm: Confirm = deny,
        auto_refresh: bool = True,
        interval: float | None = None,
        max_attempts: int | None = None,
    ):
        self.gateway = gateway or HttpGateway()
        self.state = DashboardState(auto_refresh=auto_refresh)
        self.fetcher = ContentFetcher(self.gateway, self.state, max_attempts=max_attempts)
        self.poller = ListingPoller(
            self.gateway,
            self.state,
            interval=interval,
            on_snapshot=self.fetcher.ensure,
        )
        self.deleter = DeletionController(self.gateway, self.poller, confirm=confirm)

    async def start(self) -> None:
        await self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()
        await self.fetcher.drain()

    async def __aenter__(self) -> "DashboardSession":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()

    def refresh(self) -> asyncio.Task:
        return self.poller.refresh()

    def set_auto_refresh(self, enabled: bool) -> None:
        self.poller.set_enabled(enabled)

    async def delete(self, address: str, confirm: Confirm | None = None) -> bool:
        return await self.deleter.delete(address, confirm=confirm)

    def view(self) -> DashboardView:
        return build_view(self.state, gave_up=self.fetcher.gave_up)
