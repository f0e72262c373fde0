"""
Unit tests for decosim/profile_generator.py.

Tests DiveProfile and ProfileGenerator, validating:
- Data integrity and edge cases
- Descent/ascent rates and depth bounds
- Gas mix handling
- Profile type variations
"""

import pytest

from decosim.errors import InvalidArgumentError
from decosim.gas import GasMix, AIR
from decosim.profile_generator import DiveProfile, ProfileGenerator

EAN32 = GasMix.from_o2_he(0.32)


class TestDiveProfileDataclass:
    """Tests for DiveProfile dataclass and basic operations."""

    def test_empty_profile_defaults(self):
        """Fresh DiveProfile has points=[], max_depth=0.0, name='unnamed', air."""
        profile = DiveProfile()
        assert profile.points == []
        assert profile.max_depth == 0.0
        assert profile.name == "unnamed"
        assert profile.bottom_time == 0.0
        assert profile.mix == AIR

    def test_add_point_updates_max_depth(self):
        """Adding deeper point updates max_depth, shallower doesn't reduce it."""
        profile = DiveProfile()
        profile.add_point(1.0, 66.0)
        assert profile.max_depth == pytest.approx(66.0)

        profile.add_point(2.0, 99.0)
        assert profile.max_depth == pytest.approx(99.0)

        profile.add_point(3.0, 50.0)
        assert profile.max_depth == pytest.approx(99.0)

    def test_duration(self):
        profile = DiveProfile()
        assert profile.duration == 0.0
        profile.add_point(1.0, 0.0)
        profile.add_point(11.5, 0.0)
        assert profile.duration == pytest.approx(10.5)


class TestGenerateSquare:
    """Tests for square profiles."""

    def test_square_reaches_target_depth(self):
        profile = ProfileGenerator().generate_square(99, 20)
        assert profile.max_depth == pytest.approx(99.0)
        assert any(d == 99 for _, d in profile.points)

    def test_square_starts_and_ends_at_surface(self):
        profile = ProfileGenerator().generate_square(99, 20)
        assert profile.points[0] == (0.0, 0.0)
        assert profile.points[-1][1] == 0.0

    def test_square_times_increase(self):
        profile = ProfileGenerator().generate_square(66, 15)
        times = [t for t, _ in profile.points]
        assert all(b > a for a, b in zip(times, times[1:]))

    def test_square_descent_rate_respected(self):
        """Depth never increases faster than descent_rate * interval."""
        gen = ProfileGenerator(descent_rate=60, sampling_interval=0.1)
        profile = gen.generate_square(99, 10)
        for (_, d1), (_, d2) in zip(profile.points, profile.points[1:]):
            assert d2 - d1 <= 6.0 + 1e-9

    def test_square_ascent_rate_respected(self):
        gen = ProfileGenerator(ascent_rate=30, sampling_interval=0.1)
        profile = gen.generate_square(99, 10)
        for (_, d1), (_, d2) in zip(profile.points, profile.points[1:]):
            assert d1 - d2 <= 3.0 + 1e-9

    def test_square_bottom_time_attribute(self):
        profile = ProfileGenerator().generate_square(99, 20)
        assert profile.bottom_time == 20

    def test_square_time_at_depth(self):
        gen = ProfileGenerator(sampling_interval=0.5)
        profile = gen.generate_square(60, 10)
        at_depth = [t for t, d in profile.points if d == 60]
        assert at_depth[-1] - at_depth[0] == pytest.approx(10.0)

    def test_square_mix(self):
        profile = ProfileGenerator().generate_square(99, 20, mix=EAN32)
        assert profile.mix == EAN32

    def test_square_name(self):
        profile = ProfileGenerator().generate_square(99, 20)
        assert profile.name == "square_99ft_20min"


class TestGenerateMultilevel:
    """Tests for multilevel profiles."""

    def test_multilevel_visits_all_levels(self):
        levels = [(99, 5), (66, 5), (33, 5)]
        profile = ProfileGenerator().generate_multilevel(levels)
        depths = {d for _, d in profile.points}
        for depth, _ in levels:
            assert depth in depths

    def test_multilevel_ends_at_surface(self):
        profile = ProfileGenerator().generate_multilevel([(99, 5), (66, 5)])
        assert profile.points[-1][1] == 0.0

    def test_multilevel_bottom_time_sum(self):
        profile = ProfileGenerator().generate_multilevel([(99, 5), (66, 10)])
        assert profile.bottom_time == 15
        assert profile.name == "multilevel_2levels"

    def test_multilevel_empty_levels(self):
        with pytest.raises(ValueError, match="at least one level"):
            ProfileGenerator().generate_multilevel([])


class TestGenerateSawtooth:
    """Tests for sawtooth profiles."""

    def test_sawtooth_reaches_max_depth(self):
        profile = ProfileGenerator().generate_sawtooth(99, 33, 20)
        assert profile.max_depth == pytest.approx(99.0)

    def test_sawtooth_oscillates(self):
        """Depth returns to min_depth once per oscillation."""
        profile = ProfileGenerator().generate_sawtooth(99, 40, 24, oscillations=4)
        depths = [d for _, d in profile.points]
        arrivals = sum(
            1 for a, b in zip(depths, depths[1:]) if a != 40 and b == 40
        )
        assert arrivals == 4

    def test_sawtooth_ends_at_surface(self):
        profile = ProfileGenerator().generate_sawtooth(99, 33, 20)
        assert profile.points[-1][1] == 0.0

    def test_sawtooth_name_format(self):
        profile = ProfileGenerator().generate_sawtooth(99, 33, 20, oscillations=2)
        assert profile.name == "sawtooth_99ft_2osc"

    def test_sawtooth_invalid_depths(self):
        with pytest.raises(ValueError, match="min_depth < max_depth"):
            ProfileGenerator().generate_sawtooth(33, 66, 20)

    def test_sawtooth_invalid_oscillations(self):
        with pytest.raises(ValueError, match="oscillations"):
            ProfileGenerator().generate_sawtooth(99, 33, 20, oscillations=0)


class TestGeneratorSettings:
    """Constructor validation and dispatch."""

    @pytest.mark.parametrize("kwargs", [
        {"descent_rate": 0},
        {"ascent_rate": -10},
        {"sampling_interval": 0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            ProfileGenerator(**kwargs)

    def test_generate_dispatch(self):
        gen = ProfileGenerator()
        profile = gen.generate("square", depth=66, bottom_time=10)
        assert profile.name == "square_66ft_10min"

    def test_generate_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown profile type"):
            ProfileGenerator().generate("random_walk")


class TestNegativeDepths:
    """Negative depths are refused instead of producing points above the surface."""

    def test_square_negative_depth(self):
        with pytest.raises(InvalidArgumentError, match="depth must be >= 0"):
            ProfileGenerator().generate_square(-33, 10)

    def test_multilevel_negative_level(self):
        with pytest.raises(InvalidArgumentError, match="level depth"):
            ProfileGenerator().generate_multilevel([(66, 5), (-10, 5)])

    def test_sawtooth_negative_min_depth(self):
        with pytest.raises(InvalidArgumentError, match="min_depth"):
            ProfileGenerator().generate_sawtooth(66, -5, 10)

    def test_nan_depth(self):
        with pytest.raises(InvalidArgumentError):
            ProfileGenerator().generate_square(float("nan"), 10)
