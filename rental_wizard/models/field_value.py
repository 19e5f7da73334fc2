"""Field value with source and interaction tracking."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldSource(str, Enum):
    """Source of a field's value."""

    DEFAULT = "default"  # Record default, never edited
    LOCAL = "local"  # Set by the user during this session


@dataclass
class FieldValue:
    """Represents a single listing field's value with provenance tracking.

    Attributes:
        name: The field name (e.g., "category", "lease_start_date")
        value: The current value (can be any type)
        default: The value the field resets to
        source: Where this value came from
        dirty: Whether the value was written since the last reset
        touched: Whether the user interacted with the field since the last reset
    """

    name: str
    value: Any = None
    default: Any = field(default=None, repr=False)
    source: FieldSource = FieldSource.DEFAULT
    dirty: bool = False
    touched: bool = False

    @classmethod
    def with_default(cls, name: str, default: Any) -> "FieldValue":
        """Create a field holding a private copy of its default."""
        return cls(name=name, value=copy.deepcopy(default), default=default)

    def is_local(self) -> bool:
        """Check if this value was set during the session."""
        return self.source == FieldSource.LOCAL

    def is_default(self) -> bool:
        return self.source == FieldSource.DEFAULT

    def set_local_value(self, value: Any) -> None:
        """Set a value from user input, marking it dirty and touched."""
        self.value = value
        self.source = FieldSource.LOCAL
        self.dirty = True
        self.touched = True

    def reset(self) -> None:
        """Restore the default and clear interaction flags."""
        # Fresh copy of mutable defaults (the image list)
        self.value = copy.deepcopy(self.default)
        self.source = FieldSource.DEFAULT
        self.dirty = False
        self.touched = False

    def __str__(self) -> str:
        marker = "(default)" if self.source == FieldSource.DEFAULT else ""
        return f"{self.name}={self.value!r} {marker}".strip()
