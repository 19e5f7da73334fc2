"""Field defaults and per-step classification.

This module defines every field of a listing record with its default,
which step edits it, and which fields must be filled in before the
record can be submitted.
"""

from __future__ import annotations

from typing import Any

from rental_wizard.constants import Step

# Defaults for a fresh listing record, in wire order
FIELD_DEFAULTS: dict[str, Any] = {
    "category": "",
    "location": None,
    "guest_count": 1,
    "room_count": 1,
    "bathroom_count": 1,
    "images": [],
    "title": "",
    "description": "",
    "lease_start_date": None,
    "lease_end_date": None,
    "price": 1,
    "dist_value": 0.0,
    "is_active": True,
}

# Fields edited on each step
STEP_FIELDS: dict[Step, list[str]] = {
    Step.CATEGORY: ["category"],
    Step.LOCATION: ["location"],
    Step.INFO: ["guest_count", "room_count", "bathroom_count"],
    Step.IMAGES: ["images"],
    Step.DESCRIPTION: ["title", "description", "lease_start_date", "lease_end_date"],
    Step.PRICE: ["price", "is_active"],
}

# Fields that must be non-empty when the record is submitted
REQUIRED_AT_SUBMIT: list[str] = ["category", "title", "description", "price"]

# Counter fields (positive integers)
COUNTER_FIELDS: list[str] = ["guest_count", "room_count", "bathroom_count"]

# Upload limit advertised on the images step
MAX_IMAGES = 30

FIELD_LABELS: dict[str, str] = {
    "category": "Category",
    "location": "Location",
    "guest_count": "Tenants",
    "room_count": "Bedrooms",
    "bathroom_count": "Bathrooms",
    "images": "Photos",
    "title": "Title",
    "description": "Description",
    "lease_start_date": "Lease start date",
    "lease_end_date": "Lease end date",
    "price": "Price per month",
    "dist_value": "Distance",
    "is_active": "Activate your listing",
}


def get_step_for_field(field_name: str) -> Step | None:
    """Return the step that edits a field, or None for hidden fields."""
    for step, fields in STEP_FIELDS.items():
        if field_name in fields:
            return step
    return None


def is_empty(value: Any) -> bool:
    """Check if a value counts as unset for required-field purposes."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False
