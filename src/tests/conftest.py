"""Pytest configuration and shared fixtures."""

import pytest
import sys
import os
from datetime import datetime, timedelta

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from measurement import Measurement, MeasurementType


@pytest.fixture
def origin():
    """Provide a fixed start of sampling."""
    return datetime(2023, 2, 21, 15, 0, 0)


@pytest.fixture
def at(origin):
    """Provide a factory for measurements at an offset from origin.

    Defaults to a heart rate reading of 60.
    """
    def _at(minutes=0, seconds=0, value=60.0, measurement_type=MeasurementType.HEART_RATE):
        return Measurement(
            time=origin + timedelta(minutes=minutes, seconds=seconds),
            value=value,
            type=measurement_type,
        )
    return _at
