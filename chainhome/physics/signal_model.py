"""
Goniometer Signal Model with Numba JIT Optimization

Direction and range dependent return strength seen by a Chain Home
receiver for a given goniometer setting.

The model is deliberately simple:

    amplitude = G_dir × A_range × K × F_formation

    G_dir       = cos(Δθ)^P          (0 when the contact is 90° or more off-bearing)
    A_range     = max(0, 1 - R / R_max(h))
    R_max(h)    = R_base × lerp(floor, 1, (h - h_min) / (h_max - h_min))
    F_formation = N^k                (k = 0 gives a flat response)

The scalar kernels are JIT-compiled because the trace sampler evaluates
them once per contact for every rendered frame.

Reference: Neale, "CH - the first operational radar", GEC Journal of Research, 1985
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import numba
import numpy as np

from .constants import (
    BASE_DETECTION_RANGE_MI,
    DETECTION_FLOOR_FRACTION,
    MAX_ALTITUDE_FT,
    MIN_ALTITUDE_FT,
)

# =============================================================================
# PARAMETERS
# =============================================================================


@dataclass
class AltitudeLimits:
    """
    Altitude band used to scale detection range.

    Attributes:
        min_ft: Altitude at which detection range is at its floor [ft]
        max_ft: Altitude at which detection range reaches the base range [ft]
    """

    min_ft: float = MIN_ALTITUDE_FT
    max_ft: float = MAX_ALTITUDE_FT

    def validate(self) -> None:
        """Raise ValueError if the band is empty or inverted."""
        if not self.max_ft > self.min_ft:
            raise ValueError(
                f"max_ft must exceed min_ft, got min={self.min_ft}, max={self.max_ft}"
            )


@dataclass
class SignalParameters:
    """
    Tuning knobs for the goniometer signal model.

    None of the presets is canonical; the values changed between station
    marks and are exposed here so scenarios can pick their own.

    Attributes:
        sharpness: Even exponent applied to cos(Δθ); higher narrows the lobe
        base_gain: Amplitude of a single aircraft on boresight at zero range
        base_range_mi: Detection range at maximum altitude [mi]
        floor_fraction: Fraction of base range reached at minimum altitude
        formation_exponent: Exponent on formation size (0 = flat response)
    """

    sharpness: int = 8
    base_gain: float = 3.0
    base_range_mi: float = BASE_DETECTION_RANGE_MI
    floor_fraction: float = DETECTION_FLOOR_FRACTION
    formation_exponent: float = 0.5

    PRESETS = {
        "early": {"sharpness": 4, "base_gain": 2.0, "formation_exponent": 0.0},
        "late": {"sharpness": 8, "base_gain": 3.0, "formation_exponent": 0.5},
    }

    @classmethod
    def preset(cls, name: str, **overrides: Any) -> "SignalParameters":
        """
        Build parameters from a named preset.

        Args:
            name: Preset name ("early" or "late")
            **overrides: Field values applied on top of the preset

        Returns:
            SignalParameters instance

        Raises:
            ValueError: If the preset name is unknown
        """
        key = name.lower()
        if key not in cls.PRESETS:
            raise ValueError(
                f"Unknown signal preset '{name}', expected one of {sorted(cls.PRESETS)}"
            )
        values = dict(cls.PRESETS[key])
        values.update(overrides)
        return cls(**values)

    def validate(self) -> None:
        """
        Check parameter sanity.

        Raises:
            ValueError: On odd or non-positive sharpness, or non-positive ranges/gains
        """
        if self.sharpness < 2 or self.sharpness % 2 != 0:
            raise ValueError(f"sharpness must be an even integer >= 2, got {self.sharpness}")
        if self.base_gain <= 0:
            raise ValueError(f"base_gain must be positive, got {self.base_gain}")
        if self.base_range_mi <= 0:
            raise ValueError(f"base_range_mi must be positive, got {self.base_range_mi}")
        if not 0.0 < self.floor_fraction <= 1.0:
            raise ValueError(f"floor_fraction must be in (0, 1], got {self.floor_fraction}")
        if self.formation_exponent < 0:
            raise ValueError(
                f"formation_exponent must be non-negative, got {self.formation_exponent}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "sharpness": self.sharpness,
            "base_gain": self.base_gain,
            "base_range_mi": self.base_range_mi,
            "floor_fraction": self.floor_fraction,
            "formation_exponent": self.formation_exponent,
        }


# =============================================================================
# JIT KERNELS
# =============================================================================


@numba.jit(nopython=True, cache=True)
def _bearing_deg(x: float, y: float) -> float:
    """Compass bearing of an (east, north) offset [deg, 0-360)."""
    bearing = math.degrees(math.atan2(x, y))
    if bearing < 0.0:
        bearing += 360.0
    return bearing


@numba.jit(nopython=True, cache=True)
def _angular_difference(a_deg: float, b_deg: float) -> float:
    """Shorter-arc difference between two bearings [deg, 0-180]."""
    diff = abs(a_deg - b_deg) % 360.0
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


@numba.jit(nopython=True, cache=True)
def _directional_gain(diff_deg: float, sharpness: int) -> float:
    """cos(Δθ)^P, clamped to zero on the back half of the lobe."""
    if math.isnan(diff_deg) or diff_deg >= 90.0:
        return 0.0
    c = math.cos(math.radians(diff_deg))
    if c <= 0.0:
        return 0.0
    return c**sharpness


@numba.jit(nopython=True, cache=True)
def _max_detection_range(
    altitude_ft: float,
    min_alt_ft: float,
    max_alt_ft: float,
    base_range: float,
    floor_fraction: float,
) -> float:
    """Detection range interpolated linearly in altitude."""
    if math.isnan(altitude_ft) or altitude_ft < min_alt_ft:
        altitude_ft = min_alt_ft
    elif altitude_ft > max_alt_ft:
        altitude_ft = max_alt_ft

    fraction = (altitude_ft - min_alt_ft) / (max_alt_ft - min_alt_ft)
    # lerp written so both endpoints are exact
    return base_range * (floor_fraction * (1.0 - fraction) + fraction)


@numba.jit(nopython=True, cache=True)
def _range_attenuation(range_mi: float, max_range_mi: float) -> float:
    """Linear falloff to zero at the detection range."""
    if math.isnan(range_mi) or max_range_mi <= 0.0:
        return 0.0
    if range_mi < 0.0:
        range_mi = 0.0
    return max(0.0, 1.0 - range_mi / max_range_mi)


@numba.jit(nopython=True, cache=True)
def _strength_kernel(
    x: float,
    y: float,
    altitude_ft: float,
    formation_size: float,
    goniometer_deg: float,
    min_alt_ft: float,
    max_alt_ft: float,
    base_range: float,
    floor_fraction: float,
    sharpness: int,
    base_gain: float,
    formation_exponent: float,
) -> float:
    """Full amplitude for one contact."""
    range_mi = math.sqrt(x * x + y * y)
    if math.isnan(range_mi):
        return 0.0

    diff = _angular_difference(_bearing_deg(x, y), goniometer_deg)
    gain = _directional_gain(diff, sharpness)
    if gain == 0.0:
        return 0.0

    r_max = _max_detection_range(altitude_ft, min_alt_ft, max_alt_ft, base_range, floor_fraction)
    attenuation = _range_attenuation(range_mi, r_max)

    if not formation_size >= 1.0:
        formation_size = 1.0
    formation_factor = formation_size**formation_exponent

    return gain * attenuation * base_gain * formation_factor


# =============================================================================
# PUBLIC API
# =============================================================================


def bearing_of(x: float, y: float) -> float:
    """
    Compass bearing of a Cartesian offset from the station.

    Args:
        x: East offset [mi]
        y: North offset [mi]

    Returns:
        Bearing [deg], 0-360
    """
    return _bearing_deg(float(x), float(y))


def angular_difference(a_deg: float, b_deg: float) -> float:
    """Shorter-arc angle between two bearings [deg, 0-180]."""
    return _angular_difference(float(a_deg), float(b_deg))


def directional_gain(diff_deg: float, sharpness: int = 8) -> float:
    """
    Goniometer lobe gain for an off-bearing angle.

    Args:
        diff_deg: Angle between contact bearing and goniometer [deg]
        sharpness: Even lobe exponent P

    Returns:
        Gain in [0, 1]
    """
    return _directional_gain(float(diff_deg), int(sharpness))


def max_detection_range(
    altitude_ft: float,
    altitude_limits: Optional[AltitudeLimits] = None,
    params: Optional[SignalParameters] = None,
) -> float:
    """
    Maximum detection range for a contact at the given altitude.

    Altitude is clamped into the limits first; a NaN altitude is treated as
    the minimum.

    Args:
        altitude_ft: Contact altitude [ft]
        altitude_limits: Altitude band (defaults to 1000-30000 ft)
        params: Signal parameters (defaults to SignalParameters())

    Returns:
        Detection range [mi]
    """
    limits = altitude_limits or AltitudeLimits()
    params = params or SignalParameters()
    return _max_detection_range(
        float(altitude_ft),
        float(limits.min_ft),
        float(limits.max_ft),
        float(params.base_range_mi),
        float(params.floor_fraction),
    )


def signal_strength(
    contact,
    goniometer_deg: float,
    altitude_limits: Optional[AltitudeLimits] = None,
    params: Optional[SignalParameters] = None,
) -> float:
    """
    Return amplitude of a contact for the current goniometer setting.

    Args:
        contact: Object exposing position [x, y], altitude_ft and formation_size
        goniometer_deg: Goniometer angle [deg]
        altitude_limits: Altitude band (defaults to 1000-30000 ft)
        params: Signal parameters (defaults to SignalParameters())

    Returns:
        Amplitude >= 0 (never NaN)
    """
    limits = altitude_limits or AltitudeLimits()
    params = params or SignalParameters()
    return _strength_kernel(
        float(contact.position[0]),
        float(contact.position[1]),
        float(contact.altitude_ft),
        float(contact.formation_size),
        float(goniometer_deg),
        float(limits.min_ft),
        float(limits.max_ft),
        float(params.base_range_mi),
        float(params.floor_fraction),
        int(params.sharpness),
        float(params.base_gain),
        float(params.formation_exponent),
    )


def signal_strengths(
    contacts: Iterable,
    goniometer_deg: float,
    altitude_limits: Optional[AltitudeLimits] = None,
    params: Optional[SignalParameters] = None,
) -> np.ndarray:
    """
    Amplitudes for a collection of contacts.

    Returns:
        Array of amplitudes, one per contact, in iteration order
    """
    return np.array(
        [signal_strength(c, goniometer_deg, altitude_limits, params) for c in contacts],
        dtype=np.float64,
    )


# =============================================================================
# VALIDATION
# =============================================================================


def validate_lobe_gain(
    goniometer_deg: float = 110.0, bearing_deg: float = 160.0, sharpness: int = 8
) -> dict:
    """
    Validate the goniometer lobe against the closed-form cosine power.

    Args:
        goniometer_deg: Goniometer setting [deg]
        bearing_deg: Contact bearing [deg]
        sharpness: Lobe exponent P

    Returns:
        Validation result
    """
    diff = angular_difference(bearing_deg, goniometer_deg)
    computed = directional_gain(diff, sharpness)
    expected = max(0.0, math.cos(math.radians(diff))) ** sharpness

    tolerance = 1e-12
    is_valid = abs(computed - expected) <= tolerance

    return {
        "parameters": {
            "goniometer_deg": goniometer_deg,
            "bearing_deg": bearing_deg,
            "sharpness": sharpness,
        },
        "computed_values": {
            "angular_difference_deg": diff,
            "gain": computed,
            "expected_gain": expected,
        },
        "validation": {
            "is_valid": is_valid,
            "tolerance": tolerance,
            "reference": "G = cos(Δθ)^P",
        },
    }


def validate_altitude_endpoints(params: Optional[SignalParameters] = None) -> dict:
    """
    Validate detection range at the two altitude limits.

    At the minimum altitude R_max must equal floor × base range, at the
    maximum it must equal the base range, both exactly.

    Returns:
        Validation result
    """
    params = params or SignalParameters()
    limits = AltitudeLimits()

    low = max_detection_range(limits.min_ft, limits, params)
    high = max_detection_range(limits.max_ft, limits, params)
    expected_low = params.floor_fraction * params.base_range_mi
    expected_high = params.base_range_mi

    return {
        "parameters": params.to_dict(),
        "computed_values": {
            "range_at_min_altitude_mi": low,
            "range_at_max_altitude_mi": high,
            "expected_low_mi": expected_low,
            "expected_high_mi": expected_high,
        },
        "validation": {
            "is_valid": low == expected_low and high == expected_high,
            "tolerance": 0.0,
            "reference": "R_max(h_min) = floor × R_base, R_max(h_max) = R_base",
        },
    }
