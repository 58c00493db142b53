"""
UI Panels Package

Components:
    - StationControls: Power switch, goniometer knob, analysis toggle
    - ContactTable: Live contact list for the analysis view
"""

from .contact_table import ContactTable
from .station_controls import StationControls

__all__ = [
    "StationControls",
    "ContactTable",
]
