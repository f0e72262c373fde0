"""
Depth <-> ambient pressure conversion.

Depths are feet of seawater, pressures are absolute atmospheres. Every
33 ft of seawater adds one atmosphere on top of the 1 atm at the surface.
"""

SURFACE_PRESSURE = 1.0  # atm
FEET_PER_ATM = 33.0
FEET_PER_METER = 3.281


def depth_to_pressure(depth: float) -> float:
    """Absolute pressure (atm) at a depth in feet.

    The caller guarantees depth >= 0.
    """
    return SURFACE_PRESSURE + depth / FEET_PER_ATM


def pressure_to_depth(pressure: float) -> float:
    """Depth in feet at which the absolute pressure (atm) is reached."""
    return (pressure - SURFACE_PRESSURE) * FEET_PER_ATM


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def feet_to_meters(feet: float) -> float:
    return feet / FEET_PER_METER
