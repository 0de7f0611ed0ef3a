"""Reporter module for sampled output.

Renders measurements as text listings and transforms a sampled result
into consumer-facing JSON output files.
"""

import json
import logging
import os
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Iterator, List

from measurement import Measurement
from sampler import DEFAULT_INTERVAL, SampledResult


logger = logging.getLogger(__name__)


def format_measurement(measurement: Measurement) -> str:
    """Format a measurement as "{time, TYPE, value}"."""
    return f"{{{measurement.time}, {measurement.type.name}, {measurement.value}}}"


def format_listing(title: str, measurements: Iterable[Measurement]) -> str:
    """Format a titled listing with one measurement per line.

    Example:
        >>> print(format_listing("OUTPUT", []))
        OUTPUT:
    """
    lines = [f"{title}:"]
    lines.extend(format_measurement(m) for m in measurements)
    return "\n".join(lines)


def flatten_result(result: SampledResult) -> Iterator[Measurement]:
    """Yield sampled measurements type by type in the result's key order."""
    for measurements in result.values():
        yield from measurements


def build_output(
    origin: datetime,
    result: SampledResult,
    generated_at: datetime,
    interval: timedelta = DEFAULT_INTERVAL,
) -> Dict[str, Any]:
    """Assemble the JSON-ready output for a sampled result.

    Args:
        origin: Start of sampling
        result: Sampled measurements keyed by type
        generated_at: Time the output was produced
        interval: Interval width the result was sampled with

    Returns:
        Output dict with samples keyed by measurement type value
    """
    samples: Dict[str, List[Dict[str, Any]]] = {}
    for measurement_type, measurements in result.items():
        samples[measurement_type.value] = [
            {"time": m.time.isoformat(), "value": m.value} for m in measurements
        ]

    return {
        "generated_at": generated_at.isoformat(),
        "origin": origin.isoformat(),
        "interval_minutes": interval // timedelta(minutes=1),
        "samples": samples,
    }


def write_output(output: Dict[str, Any], json_path: str) -> None:
    """Write output JSON atomically.

    Writes to a temp file first, then uses os.replace() for atomic rename.

    Args:
        output: The output dictionary to write
        json_path: Destination path
    """
    tmp_path = f"{json_path}.tmp"

    try:
        # Write to temp file
        with open(tmp_path, 'w') as f:
            json.dump(output, f, indent=2)

        # Atomic replace
        os.replace(tmp_path, json_path)

    except Exception:
        # Clean up temp file on error
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError:
            pass
        raise

    logger.info(f"Sampled output written to {json_path}")
