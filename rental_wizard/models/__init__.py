"""UI-agnostic state for the listing wizard.

This package provides testable state classes that can be used without any
presentation layer. The state layer tracks field values, their sources
(default/local) and interaction flags, and validates the record before it
is submitted.
"""

from rental_wizard.models.field_value import FieldValue, FieldSource
from rental_wizard.models.field_metadata import (
    FIELD_DEFAULTS,
    MAX_IMAGES,
    REQUIRED_AT_SUBMIT,
    STEP_FIELDS,
    get_step_for_field,
)
from rental_wizard.models.listing_state import ListingState
from rental_wizard.models.location import Location

__all__ = [
    "FieldValue",
    "FieldSource",
    "ListingState",
    "Location",
    "FIELD_DEFAULTS",
    "MAX_IMAGES",
    "REQUIRED_AT_SUBMIT",
    "STEP_FIELDS",
    "get_step_for_field",
]
