"""
Diver: the host-side object that moves through the water and feeds the
tissue model once per tick.
"""

from .deco_model import DecoModel, ModelSnapshot
from .errors import InvalidArgumentError
from .pressure import depth_to_pressure


class DiverState:
    """
    Depth and vertical velocity of a diver carrying a DecoModel.

    velocity is in ft/s, positive when ascending:
        new_depth = depth - velocity * dt
    """

    def __init__(self, model: DecoModel = None, velocity: float = 0.0):
        self.model = model if model is not None else DecoModel()
        self.depth = self.model.depth
        self.velocity = velocity

    @property
    def pressure(self) -> float:
        return depth_to_pressure(self.depth)

    def step(self, elapsed_seconds: float) -> ModelSnapshot:
        """Move for elapsed_seconds, then load tissues at the new depth.

        The diver stops at the surface instead of rising above it.
        """
        if not elapsed_seconds >= 0:
            raise InvalidArgumentError(
                f"elapsed time must be >= 0 seconds, got {elapsed_seconds}"
            )
        self.depth = max(0.0, self.depth - self.velocity * elapsed_seconds)
        self.model.set_depth(self.depth)
        return self.model.step(elapsed_seconds)

    def __repr__(self) -> str:
        return f"DiverState(depth={self.depth:.1f}ft, velocity={self.velocity:.2f}ft/s)"
