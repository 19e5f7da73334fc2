"""Step sequencing for the listing wizard."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Protocol

from rental_wizard.constants import (
    ACTION_BACK,
    ACTION_CREATE,
    ACTION_NEXT,
    FIRST_STEP,
    LAST_STEP,
    Step,
)

logger = logging.getLogger(__name__)

__all__ = ["Step", "StepController"]

StepListener = Callable[[Step], None]
SubmitHandler = Callable[[], Awaitable[object]]


class Gates(Protocol):
    can_advance: bool
    disabled: bool


class StepController:
    """Holds the active step and applies forward/back transitions.

    Rejected transitions are silent no-ops; nothing here raises.

    Args:
        gates: Source of the ``can_advance`` and ``disabled`` gates
        on_submit: Coroutine function run when the forward action fires on
            the last step
        busy: Returns True while a submission is in flight; both transitions
            are suspended meanwhile
    """

    def __init__(
        self,
        gates: Gates,
        on_submit: SubmitHandler,
        busy: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._gates = gates
        self._on_submit = on_submit
        self._busy = busy or (lambda: False)
        self._step: Step = FIRST_STEP
        self._listeners: list[StepListener] = []

    @property
    def step(self) -> Step:
        return self._step

    @property
    def is_first(self) -> bool:
        return self._step == FIRST_STEP

    @property
    def is_last(self) -> bool:
        return self._step == LAST_STEP

    @property
    def action_label(self) -> str:
        return ACTION_CREATE if self.is_last else ACTION_NEXT

    @property
    def secondary_action_label(self) -> Optional[str]:
        return None if self.is_first else ACTION_BACK

    def add_listener(self, listener: StepListener) -> None:
        """Call ``listener(step)`` after every step change."""
        self._listeners.append(listener)

    def back(self) -> bool:
        """Go to the previous step. Gates never block retreating.

        Returns:
            True if the step changed
        """
        if self._busy() or self.is_first:
            return False
        self._set_step(Step(self._step - 1))
        return True

    async def forward(self) -> bool:
        """Run the forward action.

        Advances one step unless a gate blocks it. On the last step the
        submit handler runs instead and the step never advances.

        Returns:
            True if the step changed or a submission was started
        """
        if self._busy():
            return False
        if not self._gates.can_advance:
            logger.debug("Forward rejected on %s: lease dates invalid", self._step.name)
            return False

        if self.is_last:
            await self._on_submit()
            return True

        if self._gates.disabled:
            logger.debug("Forward rejected on %s: step incomplete", self._step.name)
            return False

        self._set_step(Step(self._step + 1))
        return True

    def reset(self) -> None:
        """Return to the first step."""
        self._set_step(FIRST_STEP)

    def _set_step(self, step: Step) -> None:
        previous = self._step
        self._step = step
        logger.debug("Step %s -> %s", previous.name, step.name)
        for listener in list(self._listeners):
            listener(step)
