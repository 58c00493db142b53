"""
Chain Home Station Simulator

WWII radio-direction-finding station simulation with:
- Randomised Luftwaffe raids closing on the coast
- Goniometer signal model (cos^P lobe, altitude-dependent range)
- Time-driven A-scope sweep with grass noise and persistence
- PyQt6 operator console
"""

from chainhome.io.config_loader import StationConfig, StationConfigLoader, load_station_config
from chainhome.physics import (
    AltitudeLimits,
    SignalParameters,
    max_detection_range,
    signal_strength,
)
from chainhome.simulation.engine import StationEngine
from chainhome.simulation.objects import AIRCRAFT_CLASSES, Contact, Goniometer
from chainhome.simulation.sweep import SweepState, Trace, TraceHistory

__version__ = "1.0.0"
__author__ = "Chain Home Simulator Contributors"

__all__ = [
    # Signal model
    "AltitudeLimits",
    "SignalParameters",
    "signal_strength",
    "max_detection_range",
    # Simulation
    "AIRCRAFT_CLASSES",
    "Contact",
    "Goniometer",
    "StationEngine",
    "SweepState",
    "Trace",
    "TraceHistory",
    # Configuration
    "StationConfig",
    "StationConfigLoader",
    "load_station_config",
]
