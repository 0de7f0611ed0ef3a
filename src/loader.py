"""Measurement input module.

Loads the origin and measurements to be sampled from a YAML or JSON
file, or supplies the built-in example data set.
"""

import logging
from datetime import datetime
from typing import Any, List, Tuple

import yaml

from measurement import Measurement, MeasurementType

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Raised when a measurement file cannot be read or is malformed."""
    pass


def _parse_time(value: Any, field_name: str) -> datetime:
    """Parse a timestamp given as a YAML timestamp or an ISO-8601 string."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise LoaderError(
                f"Field '{field_name}' is not an ISO-8601 timestamp: {value!r}"
            ) from e
    raise LoaderError(
        f"Field '{field_name}' must be a timestamp, got {type(value).__name__}"
    )


def _parse_measurement(entry: Any, index: int) -> Measurement:
    """Build a Measurement from one entry of the measurements list.

    Raises:
        LoaderError: If the entry is malformed
        RangeError: If the value is outside its type's range
    """
    name = f"measurements[{index}]"
    if not isinstance(entry, dict):
        raise LoaderError(f"Entry '{name}' must be a mapping, got {type(entry).__name__}")

    for key in ("time", "type", "value"):
        if key not in entry:
            raise LoaderError(f"Missing required field: {name}.{key}")

    time = _parse_time(entry["time"], f"{name}.time")

    if not isinstance(entry["type"], str):
        raise LoaderError(f"Field '{name}.type' must be a string")
    try:
        measurement_type = MeasurementType.parse(entry["type"])
    except ValueError as e:
        raise LoaderError(f"Field '{name}.type': {e}") from e

    value = entry["value"]
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise LoaderError(
            f"Field '{name}.value' must be a number, got {type(value).__name__}"
        )

    return Measurement(time=time, value=float(value), type=measurement_type)


def load_measurements(path: str) -> Tuple[datetime, List[Measurement]]:
    """Load the origin and measurements from a YAML or JSON file.

    Expected document::

        origin: "2017-01-03T10:00:00"
        measurements:
          - {time: "2017-01-03T10:04:45", type: temperature, value: 35.79}

    Args:
        path: Path to the measurement file

    Returns:
        Tuple of (origin, measurements) with measurements in file order

    Raises:
        LoaderError: If the file cannot be read or is malformed
        RangeError: If any value is outside its type's range
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise LoaderError(f"Measurement file not found: {path}") from e
    except yaml.YAMLError as e:
        raise LoaderError(f"Invalid YAML in measurement file: {e}") from e

    if not isinstance(data, dict):
        raise LoaderError("Measurement file must contain a dictionary")

    if "origin" not in data:
        raise LoaderError("Missing required field: origin")
    origin = _parse_time(data["origin"], "origin")

    entries = data.get("measurements") or []
    if not isinstance(entries, list):
        raise LoaderError(
            f"Field 'measurements' must be a list, got {type(entries).__name__}"
        )

    measurements = [_parse_measurement(entry, i) for i, entry in enumerate(entries)]

    # Naive and timezone-aware times cannot be compared
    origin_is_naive = origin.tzinfo is None
    for i, measurement in enumerate(measurements):
        if (measurement.time.tzinfo is None) != origin_is_naive:
            raise LoaderError(
                f"Field 'measurements[{i}].time' must "
                f"{'not ' if origin_is_naive else ''}carry a timezone, like origin"
            )

    logger.info(f"Loaded {len(measurements)} measurements from {path}")
    return origin, measurements


def example_measurements() -> Tuple[datetime, List[Measurement]]:
    """Return the built-in example data set.

    Temperature and SpO2 readings follow the classic worked example;
    the heart rate readings are extra.
    """
    origin = datetime(2017, 1, 3, 10, 0, 0)

    def at(minute: int, second: int, value: float, measurement_type: MeasurementType) -> Measurement:
        return Measurement(
            time=datetime(2017, 1, 3, 10, minute, second),
            value=value,
            type=measurement_type,
        )

    temp = MeasurementType.TEMPERATURE
    hr = MeasurementType.HEART_RATE
    spo2 = MeasurementType.SPO2

    return origin, [
        at(4, 45, 35.79, temp),
        at(1, 18, 98.78, spo2),
        at(4, 39, 67, hr),
        at(9, 7, 35.01, temp),
        at(3, 34, 96.49, spo2),
        at(2, 1, 35.82, temp),
        at(7, 23, 73, hr),
        at(8, 5, 77, hr),
        at(5, 0, 97.17, spo2),
        at(5, 1, 95.08, spo2),
        at(7, 25, 75, hr),
    ]
