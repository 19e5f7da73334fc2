"""Per-step view descriptions.

Each step maps to a ``StepView`` the presentation layer renders: a heading,
a subtitle and the fields the page edits. Selecting the view is a lookup on
the controller's current step.
"""

from __future__ import annotations

from dataclasses import dataclass

from rental_wizard.constants import Step
from rental_wizard.models.field_metadata import MAX_IMAGES, STEP_FIELDS


@dataclass(frozen=True)
class StepView:
    step: Step
    title: str
    subtitle: str
    fields: tuple[str, ...]


STEP_VIEWS: dict[Step, StepView] = {
    Step.CATEGORY: StepView(
        Step.CATEGORY,
        "Which of the following best describes your place?",
        "Pick a category",
        tuple(STEP_FIELDS[Step.CATEGORY]),
    ),
    Step.LOCATION: StepView(
        Step.LOCATION,
        "Where is your place located?",
        "Help students see where they'll stay!",
        tuple(STEP_FIELDS[Step.LOCATION]),
    ),
    Step.INFO: StepView(
        Step.INFO,
        "Share some basics about your place",
        "What amenities do you have?",
        tuple(STEP_FIELDS[Step.INFO]),
    ),
    Step.IMAGES: StepView(
        Step.IMAGES,
        f"Upload some photos of your place (max {MAX_IMAGES})",
        "You can always add more later",
        tuple(STEP_FIELDS[Step.IMAGES]),
    ),
    Step.DESCRIPTION: StepView(
        Step.DESCRIPTION,
        "How would you describe your place?",
        "Short and sweet works best!",
        tuple(STEP_FIELDS[Step.DESCRIPTION]),
    ),
    Step.PRICE: StepView(
        Step.PRICE,
        "Set your price & activate your listing!",
        "Activate to indicate you are currently looking for tenants for your "
        "upcoming lease term. Deactivate later once you have found tenants!",
        tuple(STEP_FIELDS[Step.PRICE]),
    ),
}


def view_for(step: Step) -> StepView:
    return STEP_VIEWS[step]
