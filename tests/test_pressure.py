"""Tests for depth <-> pressure conversion (feet of seawater, atm)."""

import pytest

from decosim.pressure import (
    SURFACE_PRESSURE,
    FEET_PER_ATM,
    depth_to_pressure,
    pressure_to_depth,
    meters_to_feet,
    feet_to_meters,
)


class TestDepthToPressure:
    """Verify the linear seawater gradient."""

    def test_surface_is_one_atm(self):
        """0 ft is exactly 1 atm."""
        assert depth_to_pressure(0) == 1.0
        assert SURFACE_PRESSURE == 1.0

    def test_33ft_per_atm(self):
        """Every 33 ft adds one atmosphere."""
        assert depth_to_pressure(33) == pytest.approx(2.0)
        assert depth_to_pressure(99) == pytest.approx(4.0)
        assert FEET_PER_ATM == 33.0

    def test_monotonic(self):
        """Deeper always means higher pressure."""
        pressures = [depth_to_pressure(d) for d in range(0, 300, 10)]
        assert all(p2 > p1 for p1, p2 in zip(pressures, pressures[1:]))

    def test_inverse(self):
        """pressure_to_depth undoes depth_to_pressure."""
        for depth in (0.0, 12.5, 66.0, 130.0):
            assert pressure_to_depth(depth_to_pressure(depth)) == pytest.approx(depth)


class TestUnitConversion:
    """Meter/feet helpers."""

    def test_ten_meters(self):
        """10 m is about 33 ft."""
        assert meters_to_feet(10) == pytest.approx(32.81)

    def test_roundtrip(self):
        assert feet_to_meters(meters_to_feet(18.0)) == pytest.approx(18.0)
