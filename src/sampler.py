"""Sampler module for interval downsampling.

Reduces measurements, per measurement type, to the most recent reading
in each fixed-width interval counted from an origin. Pure calculation
functions with no I/O or side effects.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence

from measurement import Measurement, MeasurementType

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = timedelta(minutes=5)

SampledResult = Dict[MeasurementType, List[Measurement]]


class PrecedingTimeError(ValueError):
    """Raised when a measurement was taken before the start of sampling."""

    def __init__(self, measurement: Measurement, origin: datetime) -> None:
        self.measurement = measurement
        self.origin = origin
        super().__init__(
            f"Measurement at {measurement.time} precedes the start of sampling {origin}"
        )


def interval_index(
    origin: datetime, time: datetime, interval: timedelta = DEFAULT_INTERVAL
) -> int:
    """Compute the zero-based interval a timestamp belongs to.

    A timestamp on a non-zero interval boundary belongs to the interval
    that ends there, being the most recent reading of that window. The
    boundary check works in whole seconds, so +10:00.5 counts as +10:00.

    Args:
        origin: Start of sampling
        time: Timestamp to place, not earlier than origin
        interval: Interval width

    Returns:
        Interval index k, where the window is (origin + k*w, origin + (k+1)*w]
        for k > 0 and [origin, origin + w] for k = 0

    Example:
        >>> start = datetime(2023, 2, 21, 15, 0, 0)
        >>> interval_index(start, datetime(2023, 2, 21, 15, 10, 0))
        1
        >>> interval_index(start, datetime(2023, 2, 21, 15, 10, 1))
        2
    """
    elapsed = time - origin
    index = elapsed // interval
    whole = elapsed - timedelta(microseconds=elapsed.microseconds)
    if whole and whole % interval == timedelta(0):
        index -= 1
    return index


def group_by_type(measurements: Iterable[Measurement]) -> SampledResult:
    """Split measurements into lists keyed by their type.

    Input order is preserved within each list, and keys appear in the
    order their type is first seen.
    """
    groups: SampledResult = {}
    for measurement in measurements:
        groups.setdefault(measurement.type, []).append(measurement)
    return groups


def sample_measurements(
    origin: datetime,
    measurements: Iterable[Measurement],
    interval: timedelta = DEFAULT_INTERVAL,
) -> List[Measurement]:
    """Select the last measurement from each interval.

    Args:
        origin: Start of sampling
        measurements: Unordered measurements of a single type
        interval: Interval width

    Returns:
        One measurement per populated interval, ordered by time ascending
    """
    latest: Dict[int, Measurement] = {}
    for measurement in measurements:
        index = interval_index(origin, measurement.time, interval)
        current = latest.get(index)
        # Strictly later replaces, so the first of two equal timestamps is kept
        if current is None or measurement.time > current.time:
            latest[index] = measurement

    return [latest[index] for index in sorted(latest)]


def sample(
    origin: datetime,
    measurements: Sequence[Measurement],
    interval: timedelta = DEFAULT_INTERVAL,
) -> SampledResult:
    """Sample measurements by type into fixed-width intervals.

    - Each type of measurement is sampled separately
    - From each interval only the last measurement is taken
    - A measurement exactly on an interval border is used for the
      interval ending at that border
    - The input need not be sorted; each output list is sorted by time

    Args:
        origin: Start of sampling
        measurements: Measurements to sample
        interval: Interval width, five minutes unless given

    Returns:
        Dict mapping each type present in the input to its sampled list

    Raises:
        PrecedingTimeError: If any measurement was taken before origin
        ValueError: If interval is not positive
    """
    if interval <= timedelta(0):
        raise ValueError(f"Sampling interval must be positive, got {interval}")

    for measurement in measurements:
        if measurement.time < origin:
            raise PrecedingTimeError(measurement, origin)

    result: SampledResult = {}
    for measurement_type, group in group_by_type(measurements).items():
        result[measurement_type] = sample_measurements(origin, group, interval)
        logger.debug(
            f"Sampled {measurement_type.name}: "
            f"{len(group)} measurements -> {len(result[measurement_type])} intervals"
        )

    return result
