"""Location value produced by the location picker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class Location:
    """A picked place: a display label plus a (lat, lng) coordinate."""

    label: str
    coordinate: Optional[tuple[float, float]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Location":
        """Create from a picker payload (``latlng`` or ``coordinate`` key)."""
        raw: Optional[Sequence[float]] = data.get("latlng", data.get("coordinate"))
        coordinate = (float(raw[0]), float(raw[1])) if raw else None
        return cls(label=data.get("label", ""), coordinate=coordinate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "latlng": list(self.coordinate) if self.coordinate else None,
        }
