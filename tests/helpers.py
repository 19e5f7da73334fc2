"""Test doubles and helpers shared by the wizard tests.

Provides:
- RecordingNotifier: captures success/error notifications
- FakeListingClient: in-memory listing endpoint with optional failure and hold
- fill_listing / advance_to: drive a wizard to a given step with a valid record
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

from rental_wizard.constants import Step
from rental_wizard.lib.errors import ListingSubmissionError
from rental_wizard.models.location import Location
from rental_wizard.wizard import RentWizard

BRYN_MAWR = Location(label="Bryn Mawr, PA", coordinate=(40.02, -75.32))


class RecordingNotifier:
    """Notifier that records every message."""

    def __init__(self) -> None:
        self.successes: List[str] = []
        self.errors: List[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeListingClient:
    """Listing endpoint double.

    Args:
        fail: Raise ListingSubmissionError instead of succeeding
        hold: Block each create call until ``release()`` is called
    """

    def __init__(self, fail: bool = False, hold: bool = False) -> None:
        self.fail = fail
        self.hold = hold
        self.payloads: List[Dict[str, Any]] = []
        self._released: Optional[asyncio.Event] = None

    def release(self) -> None:
        if self._released is not None:
            self._released.set()

    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.payloads.append(payload)
        if self.hold:
            self._released = asyncio.Event()
            await self._released.wait()
        if self.fail:
            raise ListingSubmissionError("Listing service answered 500", status_code=500)
        return {"id": f"listing-{len(self.payloads)}"}


def run(coro: Any) -> Any:
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


def fill_listing(wizard: RentWizard) -> None:
    """Fill every field with values that pass all gates and validation."""
    wizard.set_field("category", "Apartment")
    wizard.set_field("location", BRYN_MAWR)
    wizard.set_field("guest_count", 2)
    wizard.set_field("images", ["img1.png", "img2.png"])
    wizard.set_field("title", "Sunny room")
    wizard.set_field("description", "Near campus")
    wizard.set_field("lease_start_date", datetime(2024, 8, 1))
    wizard.set_field("lease_end_date", datetime(2025, 5, 1))
    wizard.set_field("price", 900)


def advance_to(wizard: RentWizard, step: Step) -> None:
    """Press Next until the wizard shows ``step``."""

    async def _advance() -> None:
        while wizard.step < step:
            if not await wizard.forward():
                raise AssertionError(f"Wizard stuck on {wizard.step.name}")

    run(_advance())
