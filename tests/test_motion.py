"""
Chain Home Motion Integrator Test Suite

Tests for per-tick kinematics, retirement at the coast and population
replenishment.

Test ID | Description                         | Reference                   | Tolerance
--------|-------------------------------------|-----------------------------|-----------
1       | Range stays non-negative            | r >= 0 after every tick     | exact
2       | Retirement below minimum range      | r < 5 mi → removed          | -
3       | Replenishment floor                 | One spawn per tick below 2  | -
4       | Spawn placement                     | sqrt(U)·Rmax, sector ± 50°  | -
5       | Input list is not mutated           | New list, survivors in place| -
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chainhome.simulation.generator import TargetGenerator
from chainhome.simulation.motion import MotionIntegrator


@pytest.fixture
def generator():
    return TargetGenerator(rng=np.random.default_rng(1066))


@pytest.fixture
def integrator(generator):
    return MotionIntegrator(generator)


# =============================================================================
# TEST 1: Range Invariant
# =============================================================================


class TestRangeInvariant:
    """No contact is ever left with a negative range."""

    def test_long_run_ranges_non_negative(self, integrator):
        contacts = integrator.populate(5)

        # 6 simulated seconds per tick (100 ms at 60x compression)
        for _ in range(2000):
            contacts = integrator.step(contacts, 6.0)
            for c in contacts:
                assert c.range_mi >= 0.0
                assert np.all(np.isfinite(c.position))

    def test_large_step_clamps_to_zero(self, generator):
        integrator = MotionIntegrator(generator, min_range_mi=0.0)
        contact = generator.spawn(3.0, 160.0)

        contacts = integrator.step([contact], 3600.0)

        assert contact in contacts
        assert contact.range_mi == 0.0


# =============================================================================
# TEST 2: Retirement
# =============================================================================


class TestRetirement:
    """Contacts inside the minimum range are dropped on the next tick."""

    def test_close_contact_retired(self, generator, integrator):
        close = generator.spawn(4.0, 160.0)
        far = [generator.spawn(80.0, 150.0), generator.spawn(90.0, 170.0)]

        contacts = integrator.step([close] + far, 1.0)

        assert close not in contacts
        assert all(c in contacts for c in far)
        assert integrator.retired_count == 1

    def test_contact_outside_minimum_is_kept(self, generator, integrator):
        contact = generator.spawn(6.0, 160.0)
        other = generator.spawn(70.0, 160.0)

        contacts = integrator.step([contact, other], 1.0)

        assert contact in contacts
        assert contact.range_mi < 6.0

    def test_contact_flies_in_then_retires(self, generator):
        integrator = MotionIntegrator(generator, population_floor=0)
        contact = generator.spawn(20.0, 160.0)

        contacts = [contact]
        for _ in range(10000):
            contacts = integrator.step(contacts, 6.0)
            if not contacts:
                break

        assert contacts == []
        assert integrator.retired_count == 1


# =============================================================================
# TEST 3: Replenishment
# =============================================================================


class TestReplenishment:
    """Population floor of 2, one replacement per tick."""

    def test_one_spawn_per_tick(self, integrator):
        contacts = integrator.step([], 1.0)
        assert len(contacts) == 1
        assert integrator.spawned_count == 1

    def test_recovers_to_floor(self, generator):
        # No retirements, so growth is deterministic
        integrator = MotionIntegrator(generator, min_range_mi=0.0)

        contacts = integrator.step([], 1.0)
        contacts = integrator.step(contacts, 1.0)
        assert len(contacts) == 2

        contacts = integrator.step(contacts, 1.0)
        assert len(contacts) == 2
        assert integrator.spawned_count == 2

    def test_no_spawn_at_or_above_floor(self, generator, integrator):
        contacts = [generator.spawn(80.0, 160.0) for _ in range(3)]
        contacts = integrator.step(contacts, 1.0)

        assert len(contacts) == 3
        assert integrator.spawned_count == 0

    def test_never_silent(self, integrator):
        contacts = []
        for _ in range(2000):
            contacts = integrator.step(contacts, 6.0)
            assert len(contacts) >= 1

    def test_populate(self, integrator):
        contacts = integrator.populate(4)
        assert len(contacts) == 4
        assert len({c.contact_id for c in contacts}) == 4


# =============================================================================
# TEST 4: Spawn Placement
# =============================================================================


class TestSpawnPlacement:
    """Replacements appear inside the sector and range limits."""

    def test_within_sector_and_range(self, integrator):
        for _ in range(500):
            contact = integrator.spawn_replacement()
            assert 110.0 <= contact.track_bearing_deg <= 210.0
            assert 0.0 <= contact.range_mi <= 100.0 + 1e-9

    def test_density_compensated(self, integrator):
        """sqrt(U) places ~75% of spawns beyond half range"""
        ranges = np.array([integrator.spawn_replacement().range_mi for _ in range(2000)])
        assert 0.7 < np.mean(ranges > 50.0) < 0.8

    def test_sector_across_north(self, generator):
        integrator = MotionIntegrator(generator, sector_centre_deg=10.0, sector_half_width_deg=30.0)

        for _ in range(200):
            bearing = integrator.spawn_replacement().track_bearing_deg
            assert 0.0 <= bearing < 360.0
            assert bearing <= 40.0 or bearing >= 340.0


# =============================================================================
# TEST 5: Purity of Input
# =============================================================================


class TestStepReturnsNewList:
    def test_input_list_untouched(self, generator, integrator):
        original = [generator.spawn(4.0, 160.0), generator.spawn(50.0, 160.0)]
        snapshot = list(original)

        result = integrator.step(original, 1.0)

        assert original == snapshot
        assert result is not original

    def test_survivors_advanced_in_place(self, generator, integrator):
        contact = generator.spawn(50.0, 160.0)
        start_range = contact.range_mi
        contacts = [contact]

        result = integrator.step(contacts, 60.0)

        assert contacts == [contact]
        assert result[0] is contact
        assert contact.range_mi < start_range
