"""
Dive computer model: tissue loading plus no-decompression limit.

DecoModel ties an ambient state (depth and pressure), a breathing gas and a
CompartmentBank together. The host advances it with ``step(seconds)`` after
moving the diver with ``set_depth``; the NDL is recomputed on every step.

NDL
---
For every compartment and each inert gas the target is the Bühlmann
M-value at the surface, ``a + P_surface / b``, i.e. the highest tension the
compartment tolerates after a direct ascent. Loading at the current depth
follows the Haldane equation, so the time left until a loading reaches its
target is solved analytically. The NDL is the smallest of those times; a
loading already at or over its target gives 0.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .compartments import CompartmentBank, TissueLoadings
from .errors import InvalidArgumentError
from .gas import GasMix, AIR
from .pressure import SURFACE_PRESSURE, depth_to_pressure, pressure_to_depth
from .zhl16_constants import (
    DEFAULT_TABLE,
    HalfTimeTable,
    m_value,
    time_to_limit,
    tolerated_pressure,
)

logger = logging.getLogger(__name__)

NDL_CAP = 100.0  # minutes


@dataclass(frozen=True)
class AmbientState:
    """Depth (ft) and absolute pressure (atm), always derived from each other."""
    depth: float
    pressure: float

    @classmethod
    def at_depth(cls, depth: float) -> "AmbientState":
        if not (math.isfinite(depth) and depth >= 0):
            raise InvalidArgumentError(f"depth must be >= 0 ft, got {depth}")
        return cls(depth=float(depth), pressure=depth_to_pressure(depth))

    @classmethod
    def at_pressure(cls, pressure: float) -> "AmbientState":
        if not (math.isfinite(pressure) and pressure >= SURFACE_PRESSURE):
            raise InvalidArgumentError(
                f"ambient pressure must be >= {SURFACE_PRESSURE} atm, got {pressure}"
            )
        return cls(depth=pressure_to_depth(pressure), pressure=float(pressure))


@dataclass(frozen=True)
class ModelSnapshot:
    """Immutable model state after a step, safe to hand to another thread."""
    elapsed_seconds: float
    depth: float
    pressure: float
    loadings: TissueLoadings
    ndl: float
    ceiling: float


class DecoModel:
    """
    ZH-L16 tissue model of a single diver.

    Steps must be applied in the order the time actually elapsed; the
    instance is not safe for concurrent mutation.
    """

    def __init__(
        self,
        mix: GasMix = AIR,
        depth: Optional[float] = None,
        pressure: Optional[float] = None,
        table: HalfTimeTable = DEFAULT_TABLE,
        ndl_cap: Optional[float] = NDL_CAP,
    ):
        """
        Create the model with loadings at equilibrium with the start state.

        Args:
            mix: Breathing gas
            depth: Starting depth in feet (surface if neither depth nor
                   pressure is given)
            pressure: Starting ambient pressure in atm
            table: Compartment half-time table (shared, not copied)
            ndl_cap: Upper bound of the reported NDL in minutes, None for
                     no cap (NDL may then be infinite)
        """
        if depth is not None and pressure is not None:
            raise InvalidArgumentError("give either a starting depth or pressure, not both")
        if ndl_cap is not None and not ndl_cap > 0:
            raise InvalidArgumentError(f"ndl_cap must be positive, got {ndl_cap}")
        self._check_mix(mix)

        if pressure is not None:
            self._ambient = AmbientState.at_pressure(pressure)
        else:
            self._ambient = AmbientState.at_depth(0.0 if depth is None else depth)

        self._mix = mix
        self.table = table
        self.ndl_cap = ndl_cap
        self.elapsed_seconds = 0.0
        self._bank = CompartmentBank.at_equilibrium(table, self._ambient.pressure, mix)
        self._ndl = self._compute_ndl()

    # --- state ---

    @property
    def depth(self) -> float:
        return self._ambient.depth

    @property
    def ambient_pressure(self) -> float:
        return self._ambient.pressure

    @property
    def ambient(self) -> AmbientState:
        return self._ambient

    @property
    def gas_mix(self) -> GasMix:
        return self._mix

    @property
    def ndl(self) -> float:
        return self._ndl

    def set_depth(self, depth: float) -> None:
        """Move to a depth (ft); loadings change on the next step only."""
        self._ambient = AmbientState.at_depth(depth)
        logger.debug(f"depth {self._ambient.depth:.1f} ft ({self._ambient.pressure:.3f} atm)")

    def set_ambient_pressure(self, pressure: float) -> None:
        """Set absolute ambient pressure (atm); the depth is derived from it."""
        self._ambient = AmbientState.at_pressure(pressure)
        logger.debug(f"depth {self._ambient.depth:.1f} ft ({self._ambient.pressure:.3f} atm)")

    def set_gas_mix(self, mix: GasMix) -> None:
        """Breathe a different gas from now on; current loadings are kept."""
        self._check_mix(mix)
        logger.info(f"gas switch {self._mix.name} -> {mix.name} at {self.depth:.1f} ft")
        self._mix = mix

    def reset_compartments(self) -> None:
        """Saturate all compartments at the current pressure and gas."""
        self._bank.reset(self._ambient.pressure, self._mix)
        self._ndl = self._compute_ndl()
        logger.info(f"compartments reset at {self._ambient.pressure:.3f} atm on {self._mix.name}")

    # --- simulation ---

    def step(self, elapsed_seconds: float) -> ModelSnapshot:
        """Advance tissue loadings by elapsed_seconds at the current depth.

        Returns a snapshot of the state after the step.
        """
        previous = self._ndl
        self._bank.update(self._ambient.pressure, self._mix, elapsed_seconds)
        self.elapsed_seconds += elapsed_seconds
        self._ndl = self._compute_ndl()

        if self._ndl == 0.0 and previous > 0.0:
            logger.warning(
                f"no-decompression limit reached at {self.depth:.1f} ft after "
                f"{self.elapsed_seconds / 60.0:.1f} min"
            )
        return self.snapshot()

    def current_loadings(self) -> TissueLoadings:
        return self._bank.loadings()

    def snapshot(self) -> ModelSnapshot:
        return ModelSnapshot(
            elapsed_seconds=self.elapsed_seconds,
            depth=self._ambient.depth,
            pressure=self._ambient.pressure,
            loadings=self._bank.loadings(),
            ndl=self._ndl,
            ceiling=self.ascent_ceiling(),
        )

    # --- limits ---

    def no_decompression_limit(self) -> float:
        """Minutes left at the current depth and gas before a direct ascent
        would exceed an M-value. 0 means ascend now."""
        return self._ndl

    def controlling_compartment(self) -> Tuple[int, str]:
        """(compartment index, "N2" or "He") with the shortest time to limit."""
        return min(self._limits(), key=lambda item: item[2])[:2]

    def ascent_ceiling(self) -> float:
        """Lowest tolerated ambient pressure (atm) over all compartments.

        Values at or below the surface pressure mean a direct ascent is
        allowed. Never negative.
        """
        t = self.table
        ceiling = 0.0
        for c in range(len(t)):
            p_n2 = tolerated_pressure(self._bank.n2[c], t.n2_a[c], t.n2_b[c])
            p_he = tolerated_pressure(self._bank.he[c], t.he_a[c], t.he_b[c])
            ceiling = max(ceiling, p_n2, p_he)
        return float(ceiling)

    def ceiling_depth(self) -> float:
        """Shallowest depth (ft) the diver may ascend to, 0 for the surface."""
        return pressure_to_depth(max(self.ascent_ceiling(), SURFACE_PRESSURE))

    def _limits(self):
        """Yield (compartment, gas, minutes to M-value) for both inert gases."""
        t = self.table
        p_n2, p_he = self._mix.inspired_pressures(self._ambient.pressure)
        for c in range(len(t)):
            m_n2 = m_value(t.n2_a[c], t.n2_b[c], SURFACE_PRESSURE)
            m_he = m_value(t.he_a[c], t.he_b[c], SURFACE_PRESSURE)
            yield c, "N2", time_to_limit(self._bank.n2[c], p_n2, m_n2, t.n2_half_times[c])
            yield c, "He", time_to_limit(self._bank.he[c], p_he, m_he, t.he_half_times[c])

    def _compute_ndl(self) -> float:
        ndl = min(minutes for _, _, minutes in self._limits())
        if self.ndl_cap is not None:
            ndl = min(ndl, self.ndl_cap)
        return float(ndl)

    @staticmethod
    def _check_mix(mix) -> None:
        if not isinstance(mix, GasMix):
            raise InvalidArgumentError(f"expected a GasMix, got {mix!r}")

    # --- debug ---

    def compartment_table(self) -> str:
        """Text table of the current loadings, one compartment per line."""
        lines = ["Compartments", " #        N2 |       He"]
        for c, (n2, he) in enumerate(self._bank.loadings()):
            lines.append(f"{c:2d}  {n2:f} | {he:f}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.compartment_table()

    def __repr__(self) -> str:
        return (
            f"DecoModel(mix={self._mix.name}, depth={self.depth:.1f}ft, "
            f"table={self.table.name}, ndl={self._ndl:.1f}min)"
        )
