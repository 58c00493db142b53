"""
Chain Home API Examples

Usage examples for the station simulation API.
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_signal_model():
    """
    Example 1: Goniometer Lobe

    Return strength of one raid as the goniometer is swung across it.
    """
    from chainhome.physics import SignalParameters, max_detection_range, signal_strength
    from chainhome.simulation import AIRCRAFT_CLASSES, Contact

    raid = Contact(
        contact_id=1,
        range_mi=45.0,
        bearing_deg=160.0,
        speed_mph=220.0,
        altitude_ft=15000.0,
        aircraft_class=AIRCRAFT_CLASSES[2],  # He 111
        formation_size=9,
    )

    print("=== Goniometer Lobe Example ===")
    print(f"Raid: {raid}")
    r_max = max_detection_range(raid.altitude_ft)
    print(f"Detection range at {raid.altitude_ft:.0f} ft: {r_max:.1f} mi")

    for preset in ("early", "late"):
        params = SignalParameters.preset(preset)
        print(f"\n{preset} station (P={params.sharpness}):")
        for gonio in range(110, 211, 10):
            amp = signal_strength(raid, gonio, params=params)
            print(f"  {gonio:3d}°  {amp:5.2f}  {'#' * int(amp * 10)}")


def example_sweep():
    """
    Example 2: One A-Scope Sweep

    Power the station, run a single sweep and report the strongest echo.
    """
    from chainhome.simulation import StationEngine

    engine = StationEngine(seed=1940)
    engine.power_on()

    print("\n=== A-Scope Sweep Example ===")
    for contact in engine.contacts:
        print(f"  {contact}")

    # 60 frames per second for one 2 s sweep
    while not engine.step_sweep(1.0 / 60.0):
        pass

    peak = engine.finalized_trace.peak()
    print(f"Peak deflection {peak['deflection']:.1f} at {peak['range_mi']:.1f} mi")


def example_headless():
    """
    Example 3: Headless Run

    Swing the goniometer across the sector for 30 s of wall-clock time.
    """
    from chainhome.simulation import HeadlessConfig, HeadlessRunner

    runner = HeadlessRunner(HeadlessConfig(duration_s=30.0, goniometer_rate_deg_s=10.0, seed=7))
    result = runner.run()

    print("\n=== Headless Example ===")
    print(f"Sweeps: {len(result.sweeps)}")
    print(f"Spawned/retired: {result.contacts_spawned}/{result.contacts_retired}")
    for s in result.sweeps[:5]:
        print(f"  #{s.index} gonio={s.goniometer_deg:.1f}° peak={s.peak_deflection:.1f}")


def example_config_file():
    """
    Example 4: Station From YAML

    Load the shipped station file and create an engine from it.
    """
    from chainhome.io import StationConfigLoader

    path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        "scenarios",
        "default_station.yaml",
    )
    loader = StationConfigLoader(path)
    engine = loader.create_engine(seed=3)

    print("\n=== Config File Example ===")
    print(f"Station: {engine.config.name}")
    print(f"Sector: {engine.config.sector.limits}")
    print(f"Persistence cap: {engine.history.cap if engine.history else 'off'}")


if __name__ == "__main__":
    example_signal_model()
    example_sweep()
    example_headless()
    example_config_file()
