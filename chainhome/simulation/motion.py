"""
Motion Integrator

Advances live contacts each motion tick, retires contacts that reach the
coast and keeps the live population above a floor.

Replenishment places new contacts at range sqrt(U) × R_max so that, per
unit area, they are spread evenly over the sector rather than bunched
near the station.
"""

import logging
from typing import List, Optional

import numpy as np

from chainhome.physics.constants import (
    MAX_SIMULATED_RANGE_MI,
    MIN_CONTACT_RANGE_MI,
    POPULATION_FLOOR,
    SECTOR_CENTRE_DEG,
    SECTOR_HALF_WIDTH_DEG,
)

from .generator import TargetGenerator
from .objects import Contact

logger = logging.getLogger(__name__)


class MotionIntegrator:
    """
    Per-tick kinematics and population management.

    The list passed in is left as it was; a new list holding the surviving
    contacts plus any replacement is returned. Survivors are advanced in
    place, so the input list sees their new positions.
    """

    def __init__(
        self,
        generator: TargetGenerator,
        rng: Optional[np.random.Generator] = None,
        min_range_mi: float = MIN_CONTACT_RANGE_MI,
        max_range_mi: float = MAX_SIMULATED_RANGE_MI,
        sector_centre_deg: float = SECTOR_CENTRE_DEG,
        sector_half_width_deg: float = SECTOR_HALF_WIDTH_DEG,
        population_floor: int = POPULATION_FLOOR,
    ):
        """
        Initialize integrator.

        Args:
            generator: Source of replacement contacts
            rng: Random source for spawn positions (generator's if None)
            min_range_mi: Contacts inside this range are retired [mi]
            max_range_mi: Furthest spawn range [mi]
            sector_centre_deg: Centre of the spawn sector [deg]
            sector_half_width_deg: Half-width of the spawn sector [deg]
            population_floor: Replenish when fewer contacts remain
        """
        self.generator = generator
        self.rng = rng if rng is not None else generator.rng
        self.min_range_mi = min_range_mi
        self.max_range_mi = max_range_mi
        self.sector_centre_deg = sector_centre_deg
        self.sector_half_width_deg = sector_half_width_deg
        self.population_floor = population_floor

        # Session statistics
        self.spawned_count = 0
        self.retired_count = 0

    def step(self, contacts: List[Contact], dt: float) -> List[Contact]:
        """
        Advance all contacts by one tick.

        Args:
            contacts: Current live contacts
            dt: Time step [s]

        Returns:
            Next live contact list
        """
        survivors = []
        for contact in contacts:
            if contact.range_mi < self.min_range_mi:
                self.retired_count += 1
                logger.debug("Retired %r", contact)
                continue
            contact.update(dt)
            survivors.append(contact)

        # One replacement per tick at most
        if len(survivors) < self.population_floor:
            survivors.append(self.spawn_replacement())

        return survivors

    def populate(self, count: int) -> List[Contact]:
        """
        Create a fresh population, e.g. on power-up.

        Args:
            count: Number of contacts

        Returns:
            List of new contacts
        """
        return [self.spawn_replacement() for _ in range(count)]

    def spawn_replacement(self) -> Contact:
        """Spawn one contact at a density-compensated range within the sector."""
        range_mi = float(np.sqrt(self.rng.random()) * self.max_range_mi)
        bearing_deg = float(
            self.rng.uniform(
                self.sector_centre_deg - self.sector_half_width_deg,
                self.sector_centre_deg + self.sector_half_width_deg,
            )
        )
        self.spawned_count += 1
        return self.generator.spawn(range_mi, bearing_deg % 360.0)
