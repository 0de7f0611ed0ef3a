"""Tests for measurement.py module."""

import dataclasses
import math
from datetime import datetime

import pytest

from measurement import Measurement, MeasurementType, RangeError, VALID_RANGES


NOW = datetime(2023, 2, 21, 15, 0, 0)


class TestMeasurementValidation:
    """Tests for range validation at construction."""

    def test_invalid_temperature_raises_range_error(self):
        """Temperature of -1 → RangeError"""
        with pytest.raises(RangeError):
            Measurement(NOW, -1, MeasurementType.TEMPERATURE)

    def test_invalid_heart_rate_raises_range_error(self):
        """Heart rate of 300 → RangeError"""
        with pytest.raises(RangeError):
            Measurement(NOW, 300, MeasurementType.HEART_RATE)

    def test_invalid_spo2_raises_range_error(self):
        """SpO2 of 101 → RangeError"""
        with pytest.raises(RangeError):
            Measurement(NOW, 101, MeasurementType.SPO2)

    @pytest.mark.parametrize("measurement_type", list(MeasurementType))
    def test_bounds_are_inclusive(self, measurement_type):
        """Values exactly on either bound are accepted"""
        minimum, maximum = VALID_RANGES[measurement_type]
        assert Measurement(NOW, minimum, measurement_type).value == minimum
        assert Measurement(NOW, maximum, measurement_type).value == maximum

    @pytest.mark.parametrize("measurement_type", list(MeasurementType))
    def test_just_below_minimum_fails(self, measurement_type):
        """Value just below the minimum → RangeError naming the minimum"""
        minimum, _ = VALID_RANGES[measurement_type]
        with pytest.raises(RangeError) as exc_info:
            Measurement(NOW, minimum - 0.01, measurement_type)

        assert exc_info.value.bound == "minimum"
        assert exc_info.value.limit == minimum
        assert exc_info.value.measurement_type is measurement_type

    @pytest.mark.parametrize("measurement_type", list(MeasurementType))
    def test_just_above_maximum_fails(self, measurement_type):
        """Value just above the maximum → RangeError naming the maximum"""
        _, maximum = VALID_RANGES[measurement_type]
        with pytest.raises(RangeError) as exc_info:
            Measurement(NOW, maximum + 0.01, measurement_type)

        assert exc_info.value.bound == "maximum"
        assert "maximum" in str(exc_info.value)

    def test_nan_is_rejected(self):
        """NaN is never within range"""
        with pytest.raises(RangeError):
            Measurement(NOW, math.nan, MeasurementType.SPO2)

    def test_range_error_is_value_error(self):
        """RangeError can be handled as a ValueError"""
        with pytest.raises(ValueError):
            Measurement(NOW, 20, MeasurementType.TEMPERATURE)


class TestMeasurementRecord:
    """Tests for immutability and value semantics."""

    def test_fields_are_stored(self):
        measurement = Measurement(NOW, 36.6, MeasurementType.TEMPERATURE)

        assert measurement.time == NOW
        assert measurement.value == 36.6
        assert measurement.type is MeasurementType.TEMPERATURE

    def test_measurement_is_immutable(self):
        """Assigning to a field after construction fails"""
        measurement = Measurement(NOW, 36.6, MeasurementType.TEMPERATURE)

        with pytest.raises(dataclasses.FrozenInstanceError):
            measurement.value = 50

    def test_equality_by_field_values(self):
        first = Measurement(NOW, 98, MeasurementType.SPO2)
        second = Measurement(NOW, 98, MeasurementType.SPO2)

        assert first == second
        assert hash(first) == hash(second)


class TestMeasurementTypeParse:
    """Tests for MeasurementType.parse."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("temperature", MeasurementType.TEMPERATURE),
            ("HEART_RATE", MeasurementType.HEART_RATE),
            ("SpO2", MeasurementType.SPO2),
            ("temp", MeasurementType.TEMPERATURE),
            (" hr ", MeasurementType.HEART_RATE),
        ],
    )
    def test_known_tokens(self, token, expected):
        assert MeasurementType.parse(token) is expected

    def test_unknown_token_raises_value_error(self):
        with pytest.raises(ValueError) as exc_info:
            MeasurementType.parse("blood_pressure")

        assert "blood_pressure" in str(exc_info.value)
