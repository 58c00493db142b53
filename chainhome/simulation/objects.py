"""
Simulation Objects

Core objects for the Chain Home simulation: aircraft classes, contacts
and the goniometer.

Coordinate system: station-centred, x east, y north, statute miles.
Bearings are compass degrees (0 = north, 90 = east).

Features:
    - Fixed table of Luftwaffe aircraft classes (escort/bomber flag,
      speed and altitude bounds)
    - Contacts flying inbound along a fixed track bearing
    - Goniometer angle bounded to the station's scan sector
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numba
import numpy as np

from chainhome.physics.constants import (
    SECONDS_PER_HOUR,
    SECTOR_CENTRE_DEG,
    SECTOR_HALF_WIDTH_DEG,
)
from chainhome.physics.signal_model import bearing_of


@dataclass(frozen=True)
class AircraftClass:
    """
    Aircraft type a contact can be drawn from.

    Attributes:
        name: Type designation
        speed_range_mph: (min, max) cruise speed [mph]
        altitude_range_ft: (min, max) operating altitude [ft]
        is_escort: True for fighter escorts, False for bombers
    """

    name: str
    speed_range_mph: Tuple[float, float]
    altitude_range_ft: Tuple[float, float]
    is_escort: bool


AIRCRAFT_CLASSES: Tuple[AircraftClass, ...] = (
    AircraftClass("Bf 109", (250.0, 350.0), (15000.0, 30000.0), is_escort=True),
    AircraftClass("Bf 110", (220.0, 320.0), (12000.0, 25000.0), is_escort=True),
    AircraftClass("He 111", (180.0, 250.0), (10000.0, 20000.0), is_escort=False),
    AircraftClass("Do 17", (180.0, 255.0), (5000.0, 18000.0), is_escort=False),
    AircraftClass("Ju 88", (200.0, 290.0), (8000.0, 24000.0), is_escort=False),
)


@numba.jit(nopython=True, cache=True)
def _polar_to_cartesian(range_mi: float, bearing_deg: float) -> Tuple[float, float]:
    """(range, compass bearing) -> (east, north)."""
    theta = math.radians(bearing_deg)
    return range_mi * math.sin(theta), range_mi * math.cos(theta)


@numba.jit(nopython=True, cache=True)
def _close_on_station(
    x: float, y: float, track_bearing_deg: float, speed_mph: float, dt: float
) -> Tuple[float, float, float]:
    """
    JIT-compiled inbound motion along a fixed track bearing.

    r_new = max(0, r - v*dt)

    Args:
        x: Current east offset [mi]
        y: Current north offset [mi]
        track_bearing_deg: Bearing line the contact flies along [deg]
        speed_mph: Ground speed [mph]
        dt: Time step [s]

    Returns:
        Tuple of (new_x, new_y, new_range)
    """
    r = math.sqrt(x * x + y * y)
    new_r = r - speed_mph * dt / SECONDS_PER_HOUR
    if new_r < 0.0:
        new_r = 0.0
    theta = math.radians(track_bearing_deg)
    return new_r * math.sin(theta), new_r * math.cos(theta), new_r


class Contact:
    """
    A raid tracked by the station: one or more aircraft flying together.

    Speed, altitude and formation size are fixed for the contact's
    lifetime. The contact closes on the station along its track bearing.
    """

    def __init__(
        self,
        contact_id: int,
        range_mi: float,
        bearing_deg: float,
        speed_mph: float,
        altitude_ft: float,
        aircraft_class: AircraftClass,
        formation_size: int = 1,
    ):
        """
        Initialize contact.

        Args:
            contact_id: Identifier, unique among live contacts
            range_mi: Initial range from the station [mi]
            bearing_deg: Initial compass bearing from the station [deg]
            speed_mph: Ground speed [mph]
            altitude_ft: Altitude [ft]
            aircraft_class: Aircraft type
            formation_size: Aircraft represented by this contact
        """
        self.contact_id = contact_id
        self.track_bearing_deg = bearing_deg % 360.0
        self.speed_mph = speed_mph
        self.altitude_ft = altitude_ft
        self.aircraft_class = aircraft_class
        self.formation_size = formation_size

        x, y = _polar_to_cartesian(max(0.0, float(range_mi)), self.track_bearing_deg)
        self.position = np.array([x, y], dtype=np.float64)

    def update(self, dt: float) -> None:
        """
        Advance the contact by one time step.

        Args:
            dt: Time step [s]
        """
        x, y, _ = _close_on_station(
            self.position[0], self.position[1], self.track_bearing_deg, self.speed_mph, dt
        )
        self.position = np.array([x, y], dtype=np.float64)

    @property
    def range_mi(self) -> float:
        """Current range from the station [mi]."""
        return float(np.hypot(self.position[0], self.position[1]))

    @property
    def bearing_deg(self) -> float:
        """Current compass bearing from the station [deg]."""
        return bearing_of(self.position[0], self.position[1])

    @property
    def heading_deg(self) -> float:
        """Direction of flight [deg] (reciprocal of the track bearing)."""
        return (self.track_bearing_deg + 180.0) % 360.0

    @property
    def is_escort(self) -> bool:
        return self.aircraft_class.is_escort

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "id": self.contact_id,
            "aircraft": self.aircraft_class.name,
            "is_escort": self.is_escort,
            "position": self.position.tolist(),
            "range_mi": self.range_mi,
            "bearing_deg": self.bearing_deg,
            "heading_deg": self.heading_deg,
            "speed_mph": self.speed_mph,
            "altitude_ft": self.altitude_ft,
            "formation_size": self.formation_size,
        }

    def __repr__(self) -> str:
        return (
            f"Contact(id={self.contact_id}, {self.aircraft_class.name} x{self.formation_size}, "
            f"r={self.range_mi:.1f}mi, brg={self.bearing_deg:.1f}°)"
        )


class Goniometer:
    """
    Direction-finding goniometer.

    Holds a single angle, clamped to the scan sector.
    """

    def __init__(
        self,
        angle_deg: float = SECTOR_CENTRE_DEG,
        sector_centre_deg: float = SECTOR_CENTRE_DEG,
        sector_half_width_deg: float = SECTOR_HALF_WIDTH_DEG,
    ):
        self.min_deg = sector_centre_deg - sector_half_width_deg
        self.max_deg = sector_centre_deg + sector_half_width_deg
        self._angle_deg = self._clamp(angle_deg)

    def _clamp(self, angle_deg: float) -> float:
        angle = float(angle_deg)
        if math.isnan(angle):
            return self.min_deg
        return min(self.max_deg, max(self.min_deg, angle))

    @property
    def angle_deg(self) -> float:
        """Current goniometer setting [deg]."""
        return self._angle_deg

    @angle_deg.setter
    def angle_deg(self, value: float) -> None:
        self._angle_deg = self._clamp(value)

    def to_dict(self) -> Dict[str, float]:
        return {
            "angle_deg": self._angle_deg,
            "min_deg": self.min_deg,
            "max_deg": self.max_deg,
        }
