"""Shared constants for wizard modules.

Centralizes the step sequence, wire names and user-facing messages used
across multiple wizard files.
"""

from __future__ import annotations

from enum import IntEnum


class Step(IntEnum):
    """Ordered wizard pages. Comparison follows the page order."""

    CATEGORY = 0
    LOCATION = 1
    INFO = 2
    IMAGES = 3
    DESCRIPTION = 4
    PRICE = 5


FIRST_STEP = Step.CATEGORY
LAST_STEP = Step.PRICE


# Mapping of record field names to the names the listing service expects
# Format: "field_name": "wireName"
WIRE_FIELD_NAMES: dict[str, str] = {
    "category": "category",
    "location": "location",
    "guest_count": "guestCount",
    "room_count": "roomCount",
    "bathroom_count": "bathroomCount",
    "images": "imageSrc",
    "title": "title",
    "description": "description",
    "lease_start_date": "leaseStartDate",
    "lease_end_date": "leaseEndDate",
    "price": "price",
    "dist_value": "distValue",
    "is_active": "isActive",
}

# Fields each gate listens to
LEASE_DATE_FIELDS = ("lease_start_date", "lease_end_date")
PRESENCE_GATE_FIELDS = ("location", "images")


# =============================================================================
# User-facing labels and messages
# =============================================================================

ACTION_NEXT = "Next"
ACTION_CREATE = "Create"
ACTION_BACK = "Back"

MODAL_TITLE = "Post your space on EduRent"

LEASE_DATES_WARNING = "Lease End Date must end after the Lease Start Date"
SUBMIT_SUCCESS_MESSAGE = "Listing Created"
SUBMIT_FAILURE_MESSAGE = "Something went wrong."
