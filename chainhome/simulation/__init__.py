"""
Chain Home Simulation Package

Contacts, motion, sweep timing and the station engine, plus the
headless runner for batch use.
"""

from .engine import StationEngine
from .generator import TargetGenerator
from .headless_runner import HeadlessConfig, HeadlessResult, HeadlessRunner
from .motion import MotionIntegrator
from .objects import AIRCRAFT_CLASSES, AircraftClass, Contact, Goniometer
from .sweep import SweepState, SweepStateMachine, Trace, TraceHistory, TraceSampler

__all__ = [
    "AIRCRAFT_CLASSES",
    "AircraftClass",
    "Contact",
    "Goniometer",
    "TargetGenerator",
    "MotionIntegrator",
    "SweepState",
    "SweepStateMachine",
    "Trace",
    "TraceSampler",
    "TraceHistory",
    "StationEngine",
    "HeadlessConfig",
    "HeadlessResult",
    "HeadlessRunner",
]
