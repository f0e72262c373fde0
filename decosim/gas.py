"""
Breathing gas mixes.

Only the inert fractions (nitrogen and helium) are tracked by the tissue
model; oxygen is whatever remains.
"""

import math
from dataclasses import dataclass

from .errors import InvalidArgumentError

# Tolerance for fractions built from percentages (e.g. 21 + 79 = 100)
_FRACTION_EPS = 1e-9


@dataclass(frozen=True)
class GasMix:
    """Inert gas fractions of a breathing mix.

    f_n2: nitrogen fraction (0.0–1.0)
    f_he: helium fraction (0.0–1.0)
    The sum may not exceed 1.0; the remainder is oxygen.
    """
    f_n2: float
    f_he: float = 0.0

    def __post_init__(self):
        for label, value in (("f_n2", self.f_n2), ("f_he", self.f_he)):
            numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
            if not numeric or math.isnan(value):
                raise InvalidArgumentError(f"{label} must be a number, got {value!r}")
            if not (0.0 <= value <= 1.0):
                raise InvalidArgumentError(f"{label} must be in [0, 1], got {value}")
        if self.f_n2 + self.f_he > 1.0 + _FRACTION_EPS:
            raise InvalidArgumentError(
                f"f_n2 + f_he must be <= 1, got {self.f_n2} + {self.f_he}"
            )

    @classmethod
    def from_percent(cls, n2: float, he: float = 0.0) -> "GasMix":
        """Build a mix from nitrogen and helium percentages (79, 0 for air)."""
        return cls(f_n2=n2 / 100.0, f_he=he / 100.0)

    @classmethod
    def from_o2_he(cls, f_o2: float, f_he: float = 0.0) -> "GasMix":
        """Build a mix from oxygen and helium fractions, nitrogen is the rest."""
        if not (0.0 <= f_o2 <= 1.0):
            raise InvalidArgumentError(f"f_o2 must be in [0, 1], got {f_o2}")
        f_n2 = 1.0 - f_o2 - f_he
        if -_FRACTION_EPS < f_n2 < 0.0:
            f_n2 = 0.0
        return cls(f_n2=f_n2, f_he=f_he)

    @property
    def f_o2(self) -> float:
        return max(0.0, 1.0 - self.f_n2 - self.f_he)

    @property
    def name(self) -> str:
        """Conventional mix name: Air, EAN32, TX18/45."""
        o2 = int(round(self.f_o2 * 100))
        he = int(round(self.f_he * 100))
        if he:
            return f"TX{o2}/{he}"
        if o2 == 21:
            return "Air"
        return f"EAN{o2}"

    def inspired_pressures(self, ambient_pressure: float):
        """Inspired (N2, He) partial pressures at an ambient pressure."""
        return ambient_pressure * self.f_n2, ambient_pressure * self.f_he


AIR = GasMix(f_n2=0.79, f_he=0.0)
