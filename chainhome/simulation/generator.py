"""
Target Generator

Spawns contacts with randomised but constrained attributes.

Each raid is first assigned a mission (fighter escort or bomber), then an
aircraft class matching that mission, then speed, altitude and formation
size drawn within the class bounds. Range and bearing are supplied by the
caller.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from chainhome.physics.constants import ESCORT_PROBABILITY

from .objects import AIRCRAFT_CLASSES, AircraftClass, Contact

logger = logging.getLogger(__name__)


class TargetGenerator:
    """
    Factory for new contacts.

    Owns the contact id counter so ids stay unique across the session.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        aircraft_classes: Sequence[AircraftClass] = AIRCRAFT_CLASSES,
        escort_probability: float = ESCORT_PROBABILITY,
        escort_formation: Tuple[int, int] = (1, 2),
        bomber_formation: Tuple[int, int] = (3, 10),
    ):
        """
        Initialize generator.

        Args:
            rng: Random source (a fresh unseeded Generator if None)
            aircraft_classes: Class table to draw from
            escort_probability: Probability a raid is an escort mission
            escort_formation: Inclusive (min, max) escort formation size
            bomber_formation: Inclusive (min, max) bomber formation size

        Raises:
            ValueError: If the table lacks escort or bomber classes
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.escort_probability = escort_probability
        self.escort_formation = escort_formation
        self.bomber_formation = bomber_formation

        self._escorts = [c for c in aircraft_classes if c.is_escort]
        self._bombers = [c for c in aircraft_classes if not c.is_escort]
        if not self._escorts:
            raise ValueError("Aircraft class table has no escort classes")
        if not self._bombers:
            raise ValueError("Aircraft class table has no bomber classes")

        self._next_id = 1

    def spawn(self, range_mi: float, bearing_deg: float) -> Contact:
        """
        Create a new contact at the given position.

        Args:
            range_mi: Range from the station [mi]
            bearing_deg: Compass bearing from the station [deg]

        Returns:
            New Contact
        """
        is_escort = self.rng.random() < self.escort_probability
        pool = self._escorts if is_escort else self._bombers
        aircraft = pool[int(self.rng.integers(len(pool)))]

        speed = float(self.rng.uniform(*aircraft.speed_range_mph))
        altitude = float(self.rng.uniform(*aircraft.altitude_range_ft))

        lo, hi = self.escort_formation if is_escort else self.bomber_formation
        formation_size = int(self.rng.integers(lo, hi + 1))

        contact = Contact(
            contact_id=self._next_id,
            range_mi=range_mi,
            bearing_deg=bearing_deg,
            speed_mph=speed,
            altitude_ft=altitude,
            aircraft_class=aircraft,
            formation_size=formation_size,
        )
        self._next_id += 1

        logger.debug("Spawned %r", contact)
        return contact
