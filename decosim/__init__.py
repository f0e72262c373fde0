"""
Bühlmann ZH-L16 tissue loading and no-decompression limit model.

Modules:
    - pressure: depth (ft) <-> ambient pressure (atm) conversion
    - zhl16_constants: compartment half-time tables and M-value math
    - gas: breathing gas mixes
    - compartments: 16-compartment N2/He loading bank (Haldane kinetics)
    - deco_model: DecoModel with step() and no_decompression_limit()
    - diver: DiverState, the host object feeding the model each tick
    - profile_generator: square, multilevel and sawtooth dive profiles
    - simulation: replay profiles through a diver and collect time series
    - config: config.yaml loading
"""

from .errors import DecoError, ConfigurationError, InvalidArgumentError
from .pressure import depth_to_pressure, pressure_to_depth, SURFACE_PRESSURE
from .zhl16_constants import HalfTimeTable, ZH_L16A, ZH_L16B, ZH_L16C, get_table
from .gas import GasMix, AIR
from .compartments import CompartmentBank, TissueLoadings
from .deco_model import DecoModel, AmbientState, ModelSnapshot
from .diver import DiverState
from .profile_generator import DiveProfile, ProfileGenerator
from .simulation import DiveSimulator, SimulationResult
from .config import load_effective_config, build_model

__version__ = "0.1.0"

__all__ = [
    "DecoError",
    "ConfigurationError",
    "InvalidArgumentError",
    "depth_to_pressure",
    "pressure_to_depth",
    "SURFACE_PRESSURE",
    "HalfTimeTable",
    "ZH_L16A",
    "ZH_L16B",
    "ZH_L16C",
    "get_table",
    "GasMix",
    "AIR",
    "CompartmentBank",
    "TissueLoadings",
    "DecoModel",
    "AmbientState",
    "ModelSnapshot",
    "DiverState",
    "DiveProfile",
    "ProfileGenerator",
    "DiveSimulator",
    "SimulationResult",
    "load_effective_config",
    "build_model",
]
