"""
Chain Home I/O Package

Station configuration loading.
"""

from .config_loader import StationConfig, StationConfigLoader, load_station_config

__all__ = ["StationConfig", "StationConfigLoader", "load_station_config"]
