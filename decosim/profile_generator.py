"""
Dive profile generator.

Generates dive profiles to replay through the tissue model:
- Square profiles (constant depth)
- Multi-level profiles (stepped depths)
- Sawtooth profiles (oscillating depth)

Depths are in feet, times in minutes, rates in ft/min.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import InvalidArgumentError
from .gas import GasMix, AIR


@dataclass
class DiveProfile:
    """A dive as a sequence of (time_min, depth_ft) points breathed on one mix."""

    points: List[Tuple[float, float]] = field(default_factory=list)
    name: str = "unnamed"
    mix: GasMix = AIR
    max_depth: float = 0.0
    bottom_time: float = 0.0

    def add_point(self, time: float, depth: float):
        """Add a point to the profile. Depth in feet, time in minutes."""
        self.points.append((time, depth))
        if depth > self.max_depth:
            self.max_depth = depth

    @property
    def duration(self) -> float:
        if not self.points:
            return 0.0
        return self.points[-1][0] - self.points[0][0]


class ProfileGenerator:
    """Generate dive profiles sampled at a fixed interval."""

    def __init__(
        self,
        descent_rate: float = 60.0,  # ft/min
        ascent_rate: float = 30.0,  # ft/min (conservative)
        sampling_interval: float = 0.1,  # minutes
    ):
        if descent_rate <= 0 or ascent_rate <= 0:
            raise ValueError(
                f"Rates must be positive, got descent={descent_rate} ascent={ascent_rate}"
            )
        if sampling_interval <= 0:
            raise ValueError(f"sampling_interval must be positive, got {sampling_interval}")
        self.descent_rate = descent_rate
        self.ascent_rate = ascent_rate
        self.sampling_interval = sampling_interval

    @staticmethod
    def _check_depth(depth: float, label: str = "depth") -> None:
        if not depth >= 0:
            raise InvalidArgumentError(f"{label} must be >= 0 ft, got {depth}")

    def _travel(self, profile: DiveProfile, time: float, current: float, target: float) -> float:
        """Descend or ascend to target depth, returns the time on arrival."""
        while current != target:
            profile.add_point(time, current)
            if target > current:
                current = min(current + self.descent_rate * self.sampling_interval, target)
            else:
                current = max(current - self.ascent_rate * self.sampling_interval, target)
            time += self.sampling_interval
        return time

    def _hold(self, profile: DiveProfile, time: float, depth: float, duration: float) -> float:
        """Stay at depth for duration minutes, returns the end time."""
        steps = int(round(duration / self.sampling_interval))
        for i in range(steps):
            profile.add_point(time + i * self.sampling_interval, depth)
        return time + steps * self.sampling_interval

    def _surface(self, profile: DiveProfile, time: float, current: float) -> None:
        """Final ascent plus a 1 minute surface interval."""
        time = self._travel(profile, time, current, 0.0)
        time = self._hold(profile, time, 0.0, 1.0)
        profile.add_point(time, 0.0)

    def generate_square(
        self, depth: float, bottom_time: float, mix: GasMix = AIR
    ) -> DiveProfile:
        """
        Generate a square profile (simple recreational dive).

        Args:
            depth: Maximum depth in feet
            bottom_time: Time at depth in minutes
            mix: Breathing gas
        """
        self._check_depth(depth)
        profile = DiveProfile(name=f"square_{depth:g}ft_{bottom_time:g}min", mix=mix)
        profile.bottom_time = bottom_time

        time = self._travel(profile, 0.0, 0.0, depth)
        time = self._hold(profile, time, depth, bottom_time)
        self._surface(profile, time, depth)
        return profile

    def generate_multilevel(
        self, levels: List[Tuple[float, float]], mix: GasMix = AIR
    ) -> DiveProfile:
        """
        Generate a multi-level profile.

        Args:
            levels: List of (depth_ft, duration_min) tuples, deepest first
            mix: Breathing gas
        """
        if not levels:
            raise ValueError("Multilevel profile needs at least one level")
        for target_depth, _ in levels:
            self._check_depth(target_depth, "level depth")
        profile = DiveProfile(name=f"multilevel_{len(levels)}levels", mix=mix)
        profile.bottom_time = sum(d[1] for d in levels)

        time = 0.0
        current_depth = 0.0
        for target_depth, duration in levels:
            time = self._travel(profile, time, current_depth, target_depth)
            current_depth = target_depth
            time = self._hold(profile, time, target_depth, duration)

        self._surface(profile, time, current_depth)
        return profile

    def generate_sawtooth(
        self,
        max_depth: float,
        min_depth: float,
        total_time: float,
        oscillations: int = 3,
        mix: GasMix = AIR,
    ) -> DiveProfile:
        """
        Generate a sawtooth profile (yo-yo diving pattern).

        Args:
            max_depth: Maximum depth in feet
            min_depth: Minimum depth during oscillations
            total_time: Total bottom time in minutes
            oscillations: Number of depth oscillations
            mix: Breathing gas
        """
        self._check_depth(min_depth, "min_depth")
        if not min_depth < max_depth:
            raise ValueError(f"Need 0 <= min_depth < max_depth, got {min_depth}, {max_depth}")
        if oscillations < 1:
            raise ValueError(f"oscillations must be >= 1, got {oscillations}")
        profile = DiveProfile(name=f"sawtooth_{max_depth:g}ft_{oscillations}osc", mix=mix)
        profile.bottom_time = total_time

        time = self._travel(profile, 0.0, 0.0, max_depth)
        leg = total_time / (2 * oscillations)
        for _ in range(oscillations):
            time = self._hold(profile, time, max_depth, leg)
            time = self._travel(profile, time, max_depth, min_depth)
            time = self._hold(profile, time, min_depth, leg)
            time = self._travel(profile, time, min_depth, max_depth)

        self._surface(profile, time, max_depth)
        return profile

    def generate(self, profile_type: str, **kwargs) -> DiveProfile:
        """Dispatch by profile type name ("square", "multilevel", "sawtooth")."""
        if profile_type == "square":
            return self.generate_square(**kwargs)
        elif profile_type == "multilevel":
            return self.generate_multilevel(**kwargs)
        elif profile_type == "sawtooth":
            return self.generate_sawtooth(**kwargs)
        raise ValueError(f"Unknown profile type: {profile_type}")
