"""Listing wizard facade.

Wires the field store, the gating engine, the step controller and the
submission pipeline together around an explicit ``WizardContext``.

Example:
    context = WizardContext(client=HttpListingClient("https://edurent.example"))
    wizard = RentWizard(context)
    wizard.set_field("category", "Apartment")
    await wizard.forward()
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from rental_wizard.constants import Step
from rental_wizard.context import WizardContext
from rental_wizard.gating import GatingEngine
from rental_wizard.lib.logging import get_wizard_logger
from rental_wizard.models.listing_state import ListingState
from rental_wizard.steps import StepController
from rental_wizard.submission import SubmissionOutcome, SubmissionPipeline
from rental_wizard.views import StepView, view_for

__all__ = ["RentWizard"]


class RentWizard:
    """One wizard session over a single listing record."""

    def __init__(
        self,
        context: WizardContext,
        state: Optional[ListingState] = None,
    ) -> None:
        self.context = context
        self.state = state or ListingState.from_defaults()
        self.gates = GatingEngine(self.state, context.notifier)
        self.submission = SubmissionPipeline(self.state, self.gates, context)
        self.steps = StepController(
            self.gates,
            on_submit=self.submission.submit,
            busy=lambda: self.submission.loading,
        )
        self.submission.steps = self.steps
        self.steps.add_listener(self.gates.on_step_changed)
        self.steps.add_listener(self._on_step_changed)

        self.session_id = uuid.uuid4().hex[:12]
        self._logger = get_wizard_logger(__name__)
        self._logger.set_context(session_id=self.session_id, step=self.step.name)

    @property
    def step(self) -> Step:
        return self.steps.step

    @property
    def can_advance(self) -> bool:
        return self.gates.can_advance

    @property
    def disabled(self) -> bool:
        return self.gates.disabled

    @property
    def loading(self) -> bool:
        return self.submission.loading

    @property
    def action_label(self) -> str:
        return self.steps.action_label

    @property
    def secondary_action_label(self) -> Optional[str]:
        return self.steps.secondary_action_label

    @property
    def view(self) -> StepView:
        return view_for(self.step)

    @property
    def last_outcome(self) -> Optional[SubmissionOutcome]:
        return self.submission.last_outcome

    def get_field(self, field_name: str) -> Any:
        return self.state.get(field_name)

    def set_field(self, field_name: str, value: Any) -> None:
        self.state.set(field_name, value)

    async def forward(self) -> bool:
        """Run the primary action: Next, or Create on the last step."""
        return await self.steps.forward()

    def back(self) -> bool:
        return self.steps.back()

    def open(self) -> None:
        """Start over with a fresh record on the first step.

        Ignored while a submission is in flight.
        """
        if self.loading:
            return
        self.state.reset()
        self.steps.reset()
        self.session_id = uuid.uuid4().hex[:12]
        self._logger.set_context(session_id=self.session_id)
        self._logger.info("Wizard opened")

    def _on_step_changed(self, step: Step) -> None:
        self._logger.set_context(step=step.name)
        self._logger.debug("Showing step %s", step.name)
