"""Measurement value types.

Defines the measurement types the sampler understands, their valid
ranges, and the immutable Measurement record validated on construction.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Tuple


class MeasurementType(Enum):
    """Types of measurement which may be taken."""
    TEMPERATURE = "temperature"
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"

    @classmethod
    def parse(cls, token: str) -> "MeasurementType":
        """Parse a measurement type from its value, name or short label.

        Args:
            token: e.g. "heart_rate", "HEART_RATE" or "hr"

        Returns:
            The matching MeasurementType

        Raises:
            ValueError: If the token names no known type
        """
        normalized = token.strip().lower()
        for member in cls:
            if normalized in (member.value, member.name.lower()):
                return member
        if normalized in _SHORT_LABELS:
            return _SHORT_LABELS[normalized]
        raise ValueError(f"Unknown measurement type: {token!r}")


_SHORT_LABELS = {
    "temp": MeasurementType.TEMPERATURE,
    "hr": MeasurementType.HEART_RATE,
}

# Inclusive (minimum, maximum) per type
VALID_RANGES: Dict[MeasurementType, Tuple[float, float]] = {
    MeasurementType.TEMPERATURE: (30.0, 45.0),
    MeasurementType.HEART_RATE: (0.0, 250.0),
    MeasurementType.SPO2: (0.0, 100.0),
}


class RangeError(ValueError):
    """Raised when a measurement value is outside its type's valid range."""

    def __init__(
        self, measurement_type: MeasurementType, value: float, bound: str, limit: float
    ) -> None:
        self.measurement_type = measurement_type
        self.value = value
        self.bound = bound
        self.limit = limit
        super().__init__(
            f"{measurement_type.name} value {value} violates {bound} of {limit}"
        )


@dataclass(frozen=True)
class Measurement:
    """A single timestamped physiological reading."""
    time: datetime
    value: float
    type: MeasurementType

    def __post_init__(self) -> None:
        minimum, maximum = VALID_RANGES[self.type]
        # NaN compares false against both bounds
        if math.isnan(self.value) or self.value < minimum:
            raise RangeError(self.type, self.value, "minimum", minimum)
        if self.value > maximum:
            raise RangeError(self.type, self.value, "maximum", maximum)
