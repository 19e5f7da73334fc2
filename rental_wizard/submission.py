"""Submission handshake for a completed listing record.

The pipeline sends the record to the listing service exactly once per
forward action on the last step, tracks the loading flag the host uses to
disable its controls, and resets the wizard after a successful create.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from rental_wizard.constants import (
    LAST_STEP,
    SUBMIT_FAILURE_MESSAGE,
    SUBMIT_SUCCESS_MESSAGE,
)
from rental_wizard.context import WizardContext
from rental_wizard.lib.errors import ListingSubmissionError, ValidationError
from rental_wizard.lib.logging import get_wizard_logger
from rental_wizard.models.listing_state import ListingState

if TYPE_CHECKING:
    from rental_wizard.gating import GatingEngine
    from rental_wizard.steps import StepController

logger = get_wizard_logger(__name__)

__all__ = ["SubmissionOutcome", "SubmissionPipeline"]


class SubmissionOutcome(str, Enum):
    """Result of a single submit call."""

    SKIPPED = "skipped"  # Preconditions not met or already loading
    INVALID = "invalid"  # Record failed validation, no request sent
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionPipeline:
    """Sends the listing record to the creation endpoint.

    Exactly one request is in flight at a time: ``loading`` is raised before
    the first suspension point, so a second ``submit`` scheduled while the
    first is pending returns ``SKIPPED``. Failures leave the record and the
    step untouched so the user can retry by pressing Create again.

    Attributes:
        loading: True while a create request is in flight
        requests_sent: Number of create requests issued
        last_outcome: Outcome of the most recent submit call
        last_error: Error from the most recent failed attempt, if any
    """

    def __init__(
        self,
        state: ListingState,
        gates: "GatingEngine",
        context: WizardContext,
        steps: Optional["StepController"] = None,
    ) -> None:
        self._state = state
        self._gates = gates
        self._context = context
        self.steps = steps

        self.loading = False
        self.requests_sent = 0
        self.last_outcome: Optional[SubmissionOutcome] = None
        self.last_error: Optional[BaseException] = None

    async def submit(self) -> SubmissionOutcome:
        """Submit the record if the wizard sits on the last step."""
        outcome = await self._submit()
        self.last_outcome = outcome
        return outcome

    async def _submit(self) -> SubmissionOutcome:
        if self.loading:
            logger.debug("Submit ignored: a request is already in flight")
            return SubmissionOutcome.SKIPPED
        if self.steps is None or self.steps.step != LAST_STEP:
            return SubmissionOutcome.SKIPPED
        if not self._gates.can_advance:
            return SubmissionOutcome.SKIPPED

        issues = self._state.validate()
        if issues:
            error = ValidationError("Listing is incomplete", issues=issues)
            logger.warning("Submit blocked: %s", "; ".join(issues))
            self.last_error = error
            for issue in issues:
                self._context.notifier.error(issue)
            return SubmissionOutcome.INVALID

        self.loading = True
        try:
            return await self._send()
        finally:
            self.loading = False

    async def _send(self) -> SubmissionOutcome:
        payload = self._state.to_payload()
        self.requests_sent += 1
        started = time.monotonic()
        logger.info("Submitting listing (attempt %d)", self.requests_sent)

        try:
            response = await self._context.client.create(payload)
        except ListingSubmissionError as exc:
            logger.warning("Listing creation failed: %s", exc, extra={"error": exc.to_dict()})
            return self._fail(exc)
        except Exception as exc:
            logger.exception("Listing creation failed unexpectedly")
            return self._fail(exc)

        logger.metric("submit_duration", round(time.monotonic() - started, 3), unit="seconds")
        self.last_error = None
        self._context.notifier.success(SUBMIT_SUCCESS_MESSAGE)
        self._run_created_hook(response)

        self._state.reset()
        if self.steps is not None:
            self.steps.reset()
        self._context.modal.on_close()
        logger.info("Listing created; wizard reset")
        return SubmissionOutcome.SUCCEEDED

    def _fail(self, exc: BaseException) -> SubmissionOutcome:
        self.last_error = exc
        self._context.notifier.error(SUBMIT_FAILURE_MESSAGE)
        return SubmissionOutcome.FAILED

    def _run_created_hook(self, response: Any) -> None:
        hook = self._context.on_created
        if hook is None:
            return
        try:
            hook(response if isinstance(response, dict) else {})
        except Exception:
            logger.exception("on_created hook failed")
