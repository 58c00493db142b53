"""
Chain Home Physics Package

Station constants and the goniometer signal model.

Modules:
    - constants: Station operating figures (miles, feet, degrees)
    - signal_model: Direction/range dependent return strength
"""

from .constants import (
    BASE_DETECTION_RANGE_MI,
    MAX_ALTITUDE_FT,
    MIN_ALTITUDE_FT,
    SECTOR_CENTRE_DEG,
    SECTOR_HALF_WIDTH_DEG,
)
from .signal_model import (
    AltitudeLimits,
    SignalParameters,
    angular_difference,
    bearing_of,
    directional_gain,
    max_detection_range,
    signal_strength,
    signal_strengths,
    validate_altitude_endpoints,
    validate_lobe_gain,
)

__all__ = [
    # Constants
    "BASE_DETECTION_RANGE_MI",
    "MIN_ALTITUDE_FT",
    "MAX_ALTITUDE_FT",
    "SECTOR_CENTRE_DEG",
    "SECTOR_HALF_WIDTH_DEG",
    # Signal model
    "AltitudeLimits",
    "SignalParameters",
    "angular_difference",
    "bearing_of",
    "directional_gain",
    "max_detection_range",
    "signal_strength",
    "signal_strengths",
    # Validation
    "validate_lobe_gain",
    "validate_altitude_endpoints",
]
