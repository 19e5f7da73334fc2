"""Field store for the in-progress listing record.

This class provides a UI-agnostic representation of the listing draft that
can be tested without any presentation layer. It tracks field values and
their sources, notifies subscribers synchronously on every write, and
produces the payload sent to the listing service.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Mapping

from rental_wizard.constants import WIRE_FIELD_NAMES
from rental_wizard.lib.errors import UnknownFieldError
from rental_wizard.models.field_metadata import (
    COUNTER_FIELDS,
    FIELD_DEFAULTS,
    FIELD_LABELS,
    MAX_IMAGES,
    REQUIRED_AT_SUBMIT,
    is_empty,
)
from rental_wizard.models.field_value import FieldValue
from rental_wizard.models.location import Location

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]


@dataclass
class ListingState:
    """UI-agnostic state for a listing draft.

    Writes are unconditional: no value validation happens on ``set``. Value
    checks live in ``validate()`` and in the gating engine, which subscribes
    to the fields it depends on.

    Attributes:
        fields: Field values keyed by field name
    """

    fields: dict[str, FieldValue] = field(default_factory=dict)
    _subscribers: dict[str, list[Subscriber]] = field(
        default_factory=dict, repr=False, compare=False
    )

    @classmethod
    def from_defaults(cls) -> "ListingState":
        """Create a fresh record with every field at its default."""
        state = cls()
        for field_name, default in FIELD_DEFAULTS.items():
            state.fields[field_name] = FieldValue.with_default(field_name, default)
        return state

    def _field(self, field_name: str) -> FieldValue:
        try:
            return self.fields[field_name]
        except KeyError:
            raise UnknownFieldError(field_name) from None

    def get(self, field_name: str) -> Any:
        """Get the current value of a field."""
        return self._field(field_name).value

    def set(self, field_name: str, value: Any) -> None:
        """Set a field value, mark it dirty and touched, then notify subscribers.

        A mapping written to ``location`` is stored as a ``Location``.

        Every subscriber of the field observes the new value before this
        method returns.
        """
        if field_name == "location" and isinstance(value, Mapping):
            value = Location.from_dict(value)
        self._field(field_name).set_local_value(value)
        logger.debug("Field %s set to %r", field_name, value)
        self._notify(field_name, value)

    def subscribe(
        self, field_names: Iterable[str], callback: Subscriber
    ) -> Callable[[], None]:
        """Register a callback for changes to the given fields.

        Args:
            field_names: Fields the callback depends on
            callback: Called with ``(field_name, value)`` after each write

        Returns:
            A function that removes the subscription
        """
        names = list(field_names)
        for field_name in names:
            self._field(field_name)
            self._subscribers.setdefault(field_name, []).append(callback)

        def unsubscribe() -> None:
            for field_name in names:
                callbacks = self._subscribers.get(field_name, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def _notify(self, field_name: str, value: Any) -> None:
        # Copy so a callback may unsubscribe while being notified
        for callback in list(self._subscribers.get(field_name, [])):
            callback(field_name, value)

    def reset(self) -> None:
        """Restore every field to its default and notify all subscribers."""
        for field_val in self.fields.values():
            field_val.reset()
        logger.debug("Listing record reset to defaults")
        for field_name, field_val in self.fields.items():
            self._notify(field_name, field_val.value)

    def is_dirty(self, field_name: str) -> bool:
        return self._field(field_name).dirty

    def is_touched(self, field_name: str) -> bool:
        return self._field(field_name).touched

    def dirty_fields(self) -> list[str]:
        """Get the names of fields written since the last reset."""
        return [name for name, field_val in self.fields.items() if field_val.dirty]

    def snapshot(self) -> dict[str, Any]:
        """Get a plain mapping of field names to current values."""
        return {name: field_val.value for name, field_val in self.fields.items()}

    def is_default(self) -> bool:
        """Check if every field holds its default value."""
        return self.snapshot() == FIELD_DEFAULTS

    def validate(self) -> list[str]:
        """Validate the record for submission and return a list of errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: list[str] = []

        for field_name in REQUIRED_AT_SUBMIT:
            if is_empty(self.get(field_name)):
                errors.append(f"{FIELD_LABELS[field_name]} is required")

        price = self.get("price")
        if not is_empty(price):
            amount = _as_number(price)
            if amount is None or not math.isfinite(amount):
                errors.append(f"{FIELD_LABELS['price']} must be a number")
            elif amount <= 0:
                errors.append(f"{FIELD_LABELS['price']} must be greater than 0")

        for field_name in COUNTER_FIELDS:
            count = self.get(field_name)
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                errors.append(f"{FIELD_LABELS[field_name]} must be a positive whole number")

        images = self.get("images") or []
        if len(images) > MAX_IMAGES:
            errors.append(f"At most {MAX_IMAGES} photos can be uploaded")

        start = self.get("lease_start_date")
        end = self.get("lease_end_date")
        if start is not None and end is not None:
            try:
                out_of_order = end <= start
            except TypeError:
                out_of_order = True
            if out_of_order:
                errors.append("Lease end date must be after the lease start date")

        return errors

    def to_payload(self) -> dict[str, Any]:
        """Convert the record to the listing service's JSON payload.

        Every field is included; dates become ISO-8601 timestamps and the
        location becomes ``{"label", "latlng"}``.
        """
        payload: dict[str, Any] = {}
        for field_name, wire_name in WIRE_FIELD_NAMES.items():
            payload[wire_name] = _to_wire(self.get(field_name))
        return payload


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _to_wire(value: Any) -> Any:
    if isinstance(value, Location):
        return value.to_dict()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value
