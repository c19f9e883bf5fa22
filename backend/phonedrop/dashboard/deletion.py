"""Deletion controller — confirm, delete, then re-poll."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from phonedrop.errors import BlobNotFound, StoreUnavailable

if TYPE_CHECKING:
    from phonedrop.dashboard.gateway import HttpGateway
    from phonedrop.dashboard.poller import ListingPoller

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

PROMPT = "Delete this file?"


def deny(_prompt: str) -> bool:
    return False


class DeletionController:
    """Removes one object and lets the next listing show the result.

    Nothing is removed from local state directly; if the delete did not
    take effect the item simply shows up again in the fresh snapshot.
    """

    def __init__(self, gateway: HttpGateway, poller: ListingPoller, confirm: Confirm = deny):
        self._gateway = gateway
        self._poller = poller
        self._confirm = confirm

    async def delete(self, address: str, confirm: Confirm | None = None) -> bool:
        """Returns True when the server confirmed the delete."""
        if not (confirm or self._confirm)(PROMPT):
            logger.debug("Delete of %s not confirmed", address)
            return False

        deleted = False
        try:
            await self._gateway.delete(address)
            deleted = True
            logger.info("Deleted %s", address)
        except (StoreUnavailable, BlobNotFound) as e:
            logger.error("Failed to delete %s: %s", address, e)

        await self._poller.poll_once()
        return deleted
