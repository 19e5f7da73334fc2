"""Collaborators the wizard talks to, passed in explicitly.

The wizard never reaches for ambient state: the modal host, the
notification surface and the listing client arrive through a
``WizardContext`` built by whoever embeds the wizard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget user notifications (toasts)."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@runtime_checkable
class ModalHost(Protocol):
    """Owner of the wizard's open/closed state."""

    @property
    def is_open(self) -> bool: ...

    def on_close(self) -> None: ...


@runtime_checkable
class ListingClient(Protocol):
    """Listing-creation endpoint.

    ``create`` resolves on any 2xx answer and raises on error statuses or
    transport failures.
    """

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]: ...


class LoggingNotifier:
    """Notifier that routes user messages to the log."""

    def __init__(self, name: str = "rental_wizard.notifications") -> None:
        self._logger = logging.getLogger(name)

    def success(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.warning(message)


@dataclass
class SimpleModalHost:
    """In-memory modal state for hosts without their own window manager."""

    is_open: bool = True
    close_count: int = 0

    def on_close(self) -> None:
        self.is_open = False
        self.close_count += 1


@dataclass
class WizardContext:
    """Everything the wizard core needs from its host.

    Attributes:
        client: Listing-creation endpoint
        modal: Modal host, closed once after a successful submission
        notifier: User-facing notification surface
        on_created: Optional hook run after a successful submission
            (e.g. refreshing the host's listing view)
    """

    client: ListingClient
    modal: ModalHost = field(default_factory=SimpleModalHost)
    notifier: Notifier = field(default_factory=LoggingNotifier)
    on_created: Optional[Callable[[dict[str, Any]], None]] = None
