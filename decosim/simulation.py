"""
Replay dive profiles through a diver carrying the tissue model.

Each pair of consecutive profile points becomes one tick: the diver's
velocity is set so that it arrives at the next depth, then the diver steps
by the interval. Results are collected as per-tick time series.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .deco_model import DecoModel, NDL_CAP
from .diver import DiverState
from .errors import InvalidArgumentError
from .profile_generator import DiveProfile
from .pressure import SURFACE_PRESSURE
from .zhl16_constants import DEFAULT_TABLE, HalfTimeTable

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from running a dive profile through the tissue model."""

    # Time series data
    times: List[float]  # minutes
    depths: List[float]  # feet
    pressures: List[float]  # atm

    # Per-compartment data (16 compartments)
    compartment_n2: List[List[float]]  # [time_idx][compartment_idx]
    compartment_he: List[List[float]]  # [time_idx][compartment_idx]

    # Derived metrics
    ndl_times: List[float]  # No-decompression limit at each time step (minutes)
    ceilings: List[float]  # Tolerated ambient pressure at each time step (atm)

    @property
    def min_ndl(self) -> float:
        return min(self.ndl_times)

    @property
    def final_ndl(self) -> float:
        return self.ndl_times[-1]

    @property
    def max_ceiling(self) -> float:
        return max(self.ceilings)

    @property
    def requires_deco(self) -> bool:
        """True if the ceiling ever went below the surface."""
        return self.max_ceiling > SURFACE_PRESSURE


class DiveSimulator:
    """Run DiveProfile objects through a fresh DecoModel each time."""

    def __init__(self, table: HalfTimeTable = DEFAULT_TABLE, ndl_cap: Optional[float] = NDL_CAP):
        self.table = table
        self.ndl_cap = ndl_cap

    def run(self, profile: DiveProfile, model: DecoModel = None) -> SimulationResult:
        """
        Simulate a dive profile.

        Args:
            profile: DiveProfile with (time_min, depth_ft) points
            model: Model to drive; a new one starting at the first point
                   is created when None

        Returns:
            SimulationResult with one entry per profile point
        """
        if not profile.points:
            raise ValueError("Empty dive profile")
        for t, depth in profile.points:
            if not depth >= 0:
                raise InvalidArgumentError(
                    f"profile {profile.name} has depth {depth} ft at {t} min, must be >= 0"
                )

        start_time, start_depth = profile.points[0]
        if model is None:
            model = DecoModel(
                profile.mix, depth=start_depth, table=self.table, ndl_cap=self.ndl_cap
            )
        diver = DiverState(model)
        logger.info(
            f"simulating {profile.name}: {len(profile.points)} points, "
            f"{model.gas_mix.name}, {model.table.name}"
        )

        result = SimulationResult([], [], [], [], [], [], [])
        self._record(result, start_time, model.snapshot())

        for (t1, d1), (t2, d2) in zip(profile.points, profile.points[1:]):
            dt_seconds = (t2 - t1) * 60.0
            if dt_seconds <= 0:
                logger.debug(f"skipping non-increasing time {t1} -> {t2}")
                continue
            diver.depth = d1
            diver.velocity = (d1 - d2) / dt_seconds
            snapshot = diver.step(dt_seconds)
            self._record(result, t2, snapshot)

        logger.info(
            f"finished {profile.name}: min NDL {result.min_ndl:.1f} min, "
            f"max ceiling {result.max_ceiling:.3f} atm"
        )
        return result

    @staticmethod
    def _record(result: SimulationResult, time_min: float, snapshot) -> None:
        result.times.append(time_min)
        result.depths.append(snapshot.depth)
        result.pressures.append(snapshot.pressure)
        result.compartment_n2.append(list(snapshot.loadings.n2))
        result.compartment_he.append(list(snapshot.loadings.he))
        result.ndl_times.append(snapshot.ndl)
        result.ceilings.append(snapshot.ceiling)
