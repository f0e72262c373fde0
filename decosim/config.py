"""
Configuration loading from config.yaml.

Resolves model and simulation settings from, in increasing priority:
built-in defaults, the YAML file, and explicit overrides (CLI arguments).
"""

import logging
import os
from typing import Optional

import yaml

from .deco_model import DecoModel, NDL_CAP
from .errors import ConfigurationError, InvalidArgumentError
from .gas import GasMix, AIR
from .zhl16_constants import DEFAULT_TABLE, get_table

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "config.yaml"
)


def _number(section: dict, key: str, default, label: str, allow_none: bool = False):
    value = section.get(key, default)
    if value is None and allow_none:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{label} must be a number, got {value!r}") from e


def _section(config: dict, name: str) -> dict:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"section {name!r} must be a mapping, got {type(section).__name__}"
        )
    return section


def load_effective_config(
    config_path: Optional[str] = None,
    overrides: Optional[dict] = None,
) -> dict:
    """Load configuration from config.yaml with optional overrides.

    Recognised overrides: table, f_o2, f_he, ndl_cap, tick_seconds.

    Returns a dict with resolved settings:
        table:         HalfTimeTable instance
        gas:           GasMix instance
        ndl_cap:       float or None
        tick_seconds:  float
        descent_rate:  float (ft/min)
        ascent_rate:   float (ft/min)
        config_path:   str (resolved path)
        source:        'cli' | 'config' | 'default'
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    # Defaults
    table = DEFAULT_TABLE
    gas = AIR
    ndl_cap = NDL_CAP
    tick_seconds = 6.0
    descent_rate = 60.0
    ascent_rate = 30.0
    source = "default"

    if os.path.exists(config_path):
        try:
            with open(config_path) as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {config_path}: {e}") from e
        if not isinstance(config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")
        logger.info(f"loaded configuration from {config_path}")
        source = "config"

        model_cfg = _section(config, "model")
        if "table" in model_cfg:
            table = get_table(model_cfg["table"])
        ndl_cap = _number(model_cfg, "ndl_cap", ndl_cap, "model.ndl_cap", allow_none=True)

        gas_cfg = _section(config, "gas")
        if gas_cfg:
            gas = _gas(
                _number(gas_cfg, "f_o2", AIR.f_o2, "gas.f_o2"),
                _number(gas_cfg, "f_he", 0.0, "gas.f_he"),
            )

        sim_cfg = _section(config, "simulation")
        tick_seconds = _number(sim_cfg, "tick_seconds", tick_seconds, "simulation.tick_seconds")
        descent_rate = _number(sim_cfg, "descent_rate", descent_rate, "simulation.descent_rate")
        ascent_rate = _number(sim_cfg, "ascent_rate", ascent_rate, "simulation.ascent_rate")
    else:
        logger.debug(f"no configuration at {config_path}, using defaults")

    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    if overrides:
        if "table" in overrides:
            table = get_table(overrides["table"])
        if "f_o2" in overrides or "f_he" in overrides:
            gas = _gas(
                _number(overrides, "f_o2", gas.f_o2, "f_o2"),
                _number(overrides, "f_he", gas.f_he, "f_he"),
            )
        if "ndl_cap" in overrides:
            ndl_cap = _number(overrides, "ndl_cap", ndl_cap, "ndl_cap")
        tick_seconds = _number(overrides, "tick_seconds", tick_seconds, "tick_seconds")
        source = "cli"

    if ndl_cap is not None and ndl_cap <= 0:
        raise ConfigurationError(f"ndl_cap must be positive, got {ndl_cap}")
    if tick_seconds <= 0:
        raise ConfigurationError(f"tick_seconds must be positive, got {tick_seconds}")
    if descent_rate <= 0 or ascent_rate <= 0:
        raise ConfigurationError(
            f"rates must be positive, got descent={descent_rate} ascent={ascent_rate}"
        )

    return {
        "table": table,
        "gas": gas,
        "ndl_cap": ndl_cap,
        "tick_seconds": tick_seconds,
        "descent_rate": descent_rate,
        "ascent_rate": ascent_rate,
        "config_path": config_path,
        "source": source,
    }


def _gas(f_o2: float, f_he: float) -> GasMix:
    try:
        return GasMix.from_o2_he(f_o2, f_he)
    except InvalidArgumentError as e:
        raise ConfigurationError(f"Invalid gas mix in configuration: {e}") from e


def build_model(config: dict, depth: float = 0.0) -> DecoModel:
    """Create a DecoModel from a resolved configuration."""
    return DecoModel(
        config["gas"],
        depth=depth,
        table=config["table"],
        ndl_cap=config["ndl_cap"],
    )
