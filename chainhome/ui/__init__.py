"""
Chain Home UI Module

PyQt6 operator console for the station simulation.

Components:
    - station_controller: Timer-driven bridge between engine and UI
    - a_scope: Receiver trace (amplitude vs range)
    - ppi_scope: Plan view derived from the contact list
    - main_window: Application shell
"""

from .a_scope import AScope
from .main_window import MainWindow
from .ppi_scope import PPIScope
from .station_controller import StationController

__all__ = [
    "StationController",
    "AScope",
    "PPIScope",
    "MainWindow",
]
