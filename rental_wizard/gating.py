"""Advance gating for the listing wizard.

Two independent gates decide whether the forward action may run:

- ``can_advance`` is record-scoped. It turns False whenever both lease
  dates are set and the end date is not after the start date, and blocks
  forward progress from any step.
- ``disabled`` is step-scoped. On LOCATION it is True while no location
  with a label is picked; on IMAGES it is True while no image is uploaded;
  on every other step it is False.

The predicates are plain functions. ``GatingEngine`` keeps both gates
current by subscribing to the fields they read and to step changes.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from rental_wizard.constants import (
    FIRST_STEP,
    LEASE_DATES_WARNING,
    LEASE_DATE_FIELDS,
    PRESENCE_GATE_FIELDS,
    Step,
)
from rental_wizard.context import Notifier
from rental_wizard.models.listing_state import ListingState
from rental_wizard.models.location import Location

logger = logging.getLogger(__name__)

__all__ = [
    "GatingEngine",
    "images_blocked",
    "location_blocked",
    "step_disabled",
    "temporal_gate",
]


def temporal_gate(start: Any, end: Any) -> bool:
    """Return False only when both dates are set and end is not after start."""
    if start is None or end is None:
        return True
    return end > start


def location_blocked(location: Optional[Location]) -> bool:
    if location is None:
        return True
    return getattr(location, "label", "") == ""


def images_blocked(images: Optional[Sequence[Any]]) -> bool:
    return not images


def step_disabled(
    step: Step, location: Optional[Location], images: Optional[Sequence[Any]]
) -> bool:
    """Compute the step-scoped gate for the active step."""
    if step == Step.LOCATION:
        return location_blocked(location)
    if step == Step.IMAGES:
        return images_blocked(images)
    return False


class GatingEngine:
    """Keeps the two advance gates in sync with the record and the step.

    Both gates start non-blocking. Each recomputation happens synchronously
    inside the store write (or step change) that triggered it.
    """

    def __init__(self, state: ListingState, notifier: Notifier) -> None:
        self._state = state
        self._notifier = notifier
        self._step: Step = FIRST_STEP
        self.can_advance = True
        self.disabled = False

        self._unsubscribers = [
            state.subscribe(LEASE_DATE_FIELDS, self._on_dates_changed),
            state.subscribe(PRESENCE_GATE_FIELDS, self._on_presence_changed),
        ]
        self.recompute(warn=False)

    @property
    def step(self) -> Step:
        return self._step

    @property
    def blocked(self) -> bool:
        """True when the forward action on the current step is blocked."""
        return not self.can_advance or self.disabled

    def on_step_changed(self, step: Step) -> None:
        self._step = step
        self._recompute_disabled()

    def recompute(self, warn: bool = True) -> None:
        """Recompute both gates from the current record."""
        self._recompute_temporal(warn=warn)
        self._recompute_disabled()

    def detach(self) -> None:
        """Stop listening to the record."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_dates_changed(self, field_name: str, value: Any) -> None:
        self._recompute_temporal(warn=True)

    def _on_presence_changed(self, field_name: str, value: Any) -> None:
        self._recompute_disabled()

    def _recompute_temporal(self, warn: bool) -> None:
        start = self._state.get("lease_start_date")
        end = self._state.get("lease_end_date")
        try:
            allowed = temporal_gate(start, end)
        except TypeError:
            # A date and a datetime cannot be ordered; treat as invalid input.
            logger.warning("Cannot compare lease dates %r and %r", start, end)
            allowed = False

        self.can_advance = allowed
        if not allowed:
            logger.debug("Lease dates out of order: start=%s end=%s", start, end)
            if warn:
                self._notifier.error(LEASE_DATES_WARNING)

    def _recompute_disabled(self) -> None:
        disabled = step_disabled(
            self._step,
            self._state.get("location"),
            self._state.get("images"),
        )
        if disabled != self.disabled:
            logger.debug("Step %s disabled=%s", self._step.name, disabled)
        self.disabled = disabled
