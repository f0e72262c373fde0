"""
decosim - Dive Tissue Loading Simulator

Replays a dive profile through the Bühlmann ZH-L16 tissue model and reports
compartment loadings and the no-decompression limit along the way.

Usage:
    python main.py                          # Run with default settings below
    python main.py --depth 99 --time 30     # Quick square profile override
    python main.py --profile multilevel     # Use a multilevel profile
    python main.py --fO2 0.32 --plot        # EAN32, show plots
"""

import argparse
import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib import colormaps

from decosim import DecoError
from decosim.config import load_effective_config, build_model
from decosim.deco_model import DecoModel
from decosim.pressure import depth_to_pressure
from decosim.profile_generator import ProfileGenerator, DiveProfile
from decosim.simulation import DiveSimulator, SimulationResult


# --- USER CONFIGURATION ---
# Edit these values to plan your dive, or override via CLI arguments.

DIVE_CONFIG = {
    "profile_type": "square",       # "square", "multilevel" or "sawtooth"
    "depth_ft": 99,                 # Depth for square/sawtooth profiles (feet)
    "bottom_time_min": 20,          # Bottom time (minutes)

    # Multilevel profile: list of (depth_ft, duration_min), deepest first
    "multilevel_levels": [
        (99, 10),
        (66, 10),
        (33, 10),
    ],

    # Sawtooth profile settings
    "sawtooth_min_depth_ft": 33,    # Minimum depth during oscillations
    "sawtooth_oscillations": 3,     # Number of depth oscillations
}


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_profile(dive: dict, settings: dict) -> DiveProfile:
    """Build a DiveProfile from dive and model settings."""
    gen = ProfileGenerator(
        descent_rate=settings["descent_rate"],
        ascent_rate=settings["ascent_rate"],
        sampling_interval=settings["tick_seconds"] / 60.0,
    )
    mix = settings["gas"]
    profile_type = dive["profile_type"]

    if profile_type == "square":
        return gen.generate_square(
            depth=dive["depth_ft"], bottom_time=dive["bottom_time_min"], mix=mix,
        )
    elif profile_type == "multilevel":
        return gen.generate_multilevel(levels=dive["multilevel_levels"], mix=mix)
    elif profile_type == "sawtooth":
        return gen.generate_sawtooth(
            max_depth=dive["depth_ft"],
            min_depth=dive["sawtooth_min_depth_ft"],
            total_time=dive["bottom_time_min"],
            oscillations=dive["sawtooth_oscillations"],
            mix=mix,
        )
    else:
        raise ValueError(
            f"Unknown profile type: {profile_type}. "
            "Use 'square', 'multilevel', or 'sawtooth'."
        )


def print_dive_plan(profile: DiveProfile, model: DecoModel) -> None:
    """Print dive plan summary before simulation."""
    mix = profile.mix
    p_bottom = depth_to_pressure(profile.max_depth)
    print("--- DIVE PLAN ---")
    print(f"Profile: {profile.name}")
    print(f"Max depth: {profile.max_depth:.0f} ft ({p_bottom:.2f} atm)")
    print(f"Bottom time: {profile.bottom_time:.0f} min")
    print(f"Gas mix: {mix.name} (fN2={mix.f_n2:.2f}, fHe={mix.f_he:.2f})")
    print(f"ppN2 at bottom: {p_bottom * mix.f_n2:.3f} atm")
    print(f"Table: {model.table.name}")
    print(f"NDL at surface: {model.no_decompression_limit():.0f} min")


def print_results(result: SimulationResult, model: DecoModel) -> None:
    """Print simulation results."""
    print("\n--- SIMULATION RESULTS ---")
    print(f"Min NDL: {result.min_ndl:.1f} min")
    print(f"Max ceiling: {result.max_ceiling:.3f} atm")
    c_idx, gas = model.controlling_compartment()
    print(f"Controlling compartment: {c_idx} ({gas})")

    if result.requires_deco:
        print("\nWARNING: no-decompression limit EXCEEDED!")
        print("Mandatory decompression stops required before surfacing.")
    else:
        print(f"\nAll compartments within limits. NDL remaining: {result.final_ndl:.0f} min")
    print()
    print(model.compartment_table())


def plot_results(profile: DiveProfile, result: SimulationResult) -> None:
    """Visualize dive profile, NDL and compartment loading."""
    _fig, axes = plt.subplots(3, 1, figsize=(12, 12), sharex=True)

    # --- Row 0: Depth Profile ---
    ax_depth = axes[0]
    ax_depth.plot(result.times, result.depths, "b-", linewidth=2)
    ax_depth.set_ylabel("Depth (ft)")
    ax_depth.set_title(f"Dive Profile: {profile.name}")
    ax_depth.invert_yaxis()
    ax_depth.grid(True, alpha=0.3)
    ax_depth.fill_between(result.times, result.depths, alpha=0.15, color="blue")

    # --- Row 1: NDL ---
    ax_ndl = axes[1]
    ax_ndl.plot(result.times, result.ndl_times, "r-", linewidth=2)
    ax_ndl.set_ylabel("NDL (min)")
    ax_ndl.grid(True, alpha=0.3)

    # --- Row 2: N2 loading per compartment ---
    ax_n2 = axes[2]
    n2 = np.array(result.compartment_n2)
    cmap = colormaps["viridis"]
    colors = cmap(np.linspace(0, 1, n2.shape[1]))
    for c_idx in range(n2.shape[1]):
        ax_n2.plot(result.times, n2[:, c_idx], color=colors[c_idx], label=f"{c_idx}")
    ax_n2.set_xlabel("Time (min)")
    ax_n2.set_ylabel("ppN2 (atm)")
    ax_n2.set_title("Compartment N2 loading")
    ax_n2.legend(loc="upper right", fontsize=7, ncol=4)
    ax_n2.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for quick overrides."""
    parser = argparse.ArgumentParser(
        description="decosim - ZH-L16 Dive Tissue Simulator",
    )
    parser.add_argument("--depth", type=float, help="Dive depth in feet")
    parser.add_argument("--time", type=float, help="Bottom time in minutes")
    parser.add_argument("--fO2", type=float, help="O2 fraction (e.g. 0.32 for EAN32)")
    parser.add_argument("--fHe", type=float, help="He fraction (e.g. 0.45 for TX18/45)")
    parser.add_argument(
        "--profile", choices=["square", "multilevel", "sawtooth"],
        help="Profile type",
    )
    parser.add_argument("--table", help="Compartment table (ZH-L16A, ZH-L16B, ZH-L16C)")
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config YAML (default: config.yaml next to the package)",
    )
    parser.add_argument("--plot", action="store_true", help="Show plots")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    setup_logging(args.verbose)

    # Apply CLI overrides to dive config
    dive = DIVE_CONFIG.copy()
    if args.depth is not None:
        dive["depth_ft"] = args.depth
    if args.time is not None:
        dive["bottom_time_min"] = args.time
    if args.profile is not None:
        dive["profile_type"] = args.profile

    try:
        settings = load_effective_config(
            args.config,
            overrides={"table": args.table, "f_o2": args.fO2, "f_he": args.fHe},
        )
        profile = build_profile(dive, settings)
        model = build_model(settings)

        print_dive_plan(profile, model)
        result = DiveSimulator(settings["table"], settings["ndl_cap"]).run(profile, model)
    except (DecoError, ValueError) as e:
        logging.getLogger(__name__).error(f"{e}")
        return 1

    print_results(result, model)

    if args.plot:
        plot_results(profile, result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
