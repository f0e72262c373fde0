"""
Tissue compartment bank: 16 compartments x (N2, He) inert gas loadings.

Gas exchange follows single-exponential (Haldane) kinetics at constant
ambient pressure:

    P = P0 + (P_gas - P0) * (1 - 2^(-t / half_time))

where P_gas is the inspired partial pressure of the gas and t is in minutes.
The equation is the exact solution at constant pressure, so splitting an
interval into several steps gives the same result as one long step.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .errors import InvalidArgumentError
from .gas import GasMix
from .zhl16_constants import HalfTimeTable, NUM_COMPARTMENTS, DEFAULT_TABLE


def haldane_vec(
    p0: np.ndarray, p_gas: float, minutes: float, half_times: np.ndarray
) -> np.ndarray:
    """Vectorized Haldane equation across compartments.

    Large exposure times underflow 2^(-t/half_time) to 0.0, which yields
    the equilibrium value p_gas.
    """
    return p0 + (p_gas - p0) * (1.0 - np.exp2(-minutes / half_times))


@dataclass(frozen=True)
class TissueLoadings:
    """Read-only snapshot of compartment loadings (atm)."""
    n2: Tuple[float, ...]
    he: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.n2)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """Iterate (n2, he) pairs, fastest compartment first."""
        return iter(zip(self.n2, self.he))

    def total(self, idx: int) -> float:
        return self.n2[idx] + self.he[idx]


class CompartmentBank:
    """Current N2/He loadings of all compartments.

    The half-time table is shared by reference, never copied.
    """

    def __init__(
        self,
        table: HalfTimeTable = DEFAULT_TABLE,
        n2: np.ndarray = None,
        he: np.ndarray = None,
    ):
        self.table = table
        self.n2 = np.zeros(NUM_COMPARTMENTS) if n2 is None else np.array(n2, dtype=float)
        self.he = np.zeros(NUM_COMPARTMENTS) if he is None else np.array(he, dtype=float)

    @classmethod
    def at_equilibrium(
        cls, table: HalfTimeTable, ambient_pressure: float, mix: GasMix
    ) -> "CompartmentBank":
        """Bank saturated with the mix at the given ambient pressure."""
        bank = cls(table)
        bank.reset(ambient_pressure, mix)
        return bank

    def reset(self, ambient_pressure: float, mix: GasMix) -> None:
        """Set all compartments to equilibrium with the mix."""
        p_n2, p_he = mix.inspired_pressures(ambient_pressure)
        self.n2 = np.full(NUM_COMPARTMENTS, p_n2)
        self.he = np.full(NUM_COMPARTMENTS, p_he)

    def update(
        self, ambient_pressure: float, mix: GasMix, elapsed_seconds: float
    ) -> None:
        """Advance all compartments by elapsed_seconds at constant pressure.

        A gas with zero fraction in the mix keeps its current loading.
        """
        if not elapsed_seconds >= 0:
            raise InvalidArgumentError(
                f"elapsed time must be >= 0 seconds, got {elapsed_seconds}"
            )
        if elapsed_seconds == 0:
            return

        minutes = elapsed_seconds / 60.0
        p_n2, p_he = mix.inspired_pressures(ambient_pressure)
        if mix.f_n2 != 0:
            self.n2 = haldane_vec(self.n2, p_n2, minutes, self.table.n2_half_times)
        if mix.f_he != 0:
            self.he = haldane_vec(self.he, p_he, minutes, self.table.he_half_times)

    def loadings(self) -> TissueLoadings:
        return TissueLoadings(
            n2=tuple(float(v) for v in self.n2),
            he=tuple(float(v) for v in self.he),
        )

    def copy(self) -> "CompartmentBank":
        return CompartmentBank(self.table, self.n2.copy(), self.he.copy())
