#!/usr/bin/env python3
"""
Headless Station CLI

Run the Chain Home station without a GUI and report sweep results.

Usage:
    python headless.py                                      # Default station
    python headless.py --config scenarios/default_station.yaml
    python headless.py --duration 30 --seed 7 --sweep-rate 10

Examples:
    # Fixed goniometer on the sector centre, machine-readable output
    python headless.py --goniometer 160 --json

    # Swing the goniometer across the sector at 20°/s
    python headless.py --sweep-rate 20 --duration 60
"""

import argparse
import json
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from chainhome.io.config_loader import StationConfig, load_station_config
from chainhome.simulation.headless_runner import HeadlessConfig, HeadlessRunner


def main():
    parser = argparse.ArgumentParser(description="Run headless Chain Home station")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML station configuration")

    # Run parameters
    parser.add_argument(
        "--duration", type=float, default=10.0, help="Wall-clock seconds to simulate (default: 10)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--goniometer", type=float, default=160.0, help="Goniometer angle in deg (default: 160)"
    )
    parser.add_argument(
        "--sweep-rate",
        type=float,
        default=0.0,
        help="Goniometer swing rate in deg/s (default: 0, fixed)",
    )

    # Options
    parser.add_argument("--verbose", action="store_true", help="Log contact spawns and retirements")
    parser.add_argument("--json", action="store_true", help="Print result as JSON")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)-7s %(name)s: %(message)s",
    )

    # Load config
    if args.config:
        if not os.path.exists(args.config):
            print(f"Error: Config file not found: {args.config}")
            return 1
        try:
            station = load_station_config(args.config)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    else:
        station = StationConfig()

    config = HeadlessConfig(
        station=station,
        duration_s=args.duration,
        goniometer_deg=args.goniometer,
        goniometer_rate_deg_s=args.sweep_rate,
        seed=args.seed,
    )

    if not args.json:
        print("=" * 60)
        print(f"{station.name} - Headless Mode")
        print("=" * 60)
        print(f"Duration: {config.duration_s:.1f} s")
        print(
            f"Goniometer: {config.goniometer_deg:.1f}° "
            f"(swing {config.goniometer_rate_deg_s}°/s)"
        )
        print(f"Sweep: {station.sweep.width} samples in {station.sweep.duration_s:.1f} s")
        print(f"Time compression: {station.timing.time_compression:.0f}x")
        print("=" * 60)

    # Run simulation
    runner = HeadlessRunner(config)
    result = runner.run()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print("\n--- SWEEPS ---")
    for sweep in result.sweeps:
        print(
            f"#{sweep.index:3d}  t={sweep.time_s:6.2f}s  gonio={sweep.goniometer_deg:6.1f}°  "
            f"contacts={sweep.contact_count}  peak={sweep.peak_deflection:6.1f} "
            f"@ {sweep.peak_range_mi:5.1f} mi"
        )

    print("\n--- RESULTS ---")
    print(f"Sweeps completed: {len(result.sweeps)}")
    print(f"Motion ticks: {result.motion_ticks:,}")
    print(f"Contacts spawned/retired: {result.contacts_spawned} / {result.contacts_retired}")
    print(f"Minimum population: {result.min_population}")
    print(f"Final contacts: {len(result.final_contacts)}")
    print(f"Runtime: {result.runtime_s * 1000:.1f} ms")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
