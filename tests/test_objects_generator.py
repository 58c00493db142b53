"""
Chain Home Contact and Target Generator Test Suite

Tests for the aircraft class table, contact kinematics, the goniometer
and the randomised target generator.

Test ID | Description                          | Reference                  | Tolerance
--------|--------------------------------------|----------------------------|-----------
1       | Class table covers both missions     | Escort + bomber classes    | -
2       | Inbound motion along track bearing   | r = r0 - v*dt              | ±1e-9 mi
3       | Range clamped at zero                | r >= 0                     | exact
4       | Goniometer bounded to scan sector    | 110° .. 210°               | exact
5       | Generator attribute bounds           | Class speed/alt, formation | -
6       | Generator fails fast on empty pool   | ValueError                 | -
7       | Seeded determinism                   | Same seed, same raid       | exact
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chainhome.simulation.generator import TargetGenerator
from chainhome.simulation.objects import AIRCRAFT_CLASSES, AircraftClass, Contact, Goniometer

# =============================================================================
# TEST 1: Aircraft Classes
# =============================================================================


class TestAircraftClasses:
    """Fixed class table."""

    def test_both_missions_present(self):
        assert any(c.is_escort for c in AIRCRAFT_CLASSES)
        assert any(not c.is_escort for c in AIRCRAFT_CLASSES)

    def test_bounds_are_ordered(self):
        for c in AIRCRAFT_CLASSES:
            assert c.speed_range_mph[0] < c.speed_range_mph[1], c.name
            assert c.altitude_range_ft[0] < c.altitude_range_ft[1], c.name

    def test_classes_are_immutable(self):
        with pytest.raises(AttributeError):
            AIRCRAFT_CLASSES[0].name = "Spitfire"


# =============================================================================
# TEST 2-3: Contact Kinematics
# =============================================================================


class TestContactMotion:
    """
    Inbound motion along a fixed track bearing.

    Reference: r_new = max(0, r - v*dt), v in mph, dt in seconds.
    """

    def _contact(self, range_mi=50.0, bearing_deg=90.0, speed_mph=360.0):
        return Contact(
            contact_id=7,
            range_mi=range_mi,
            bearing_deg=bearing_deg,
            speed_mph=speed_mph,
            altitude_ft=12000.0,
            aircraft_class=AIRCRAFT_CLASSES[4],
            formation_size=6,
        )

    def test_initial_position(self):
        contact = self._contact(range_mi=50.0, bearing_deg=90.0)
        assert contact.position[0] == pytest.approx(50.0)
        assert contact.position[1] == pytest.approx(0.0, abs=1e-9)

    def test_closes_on_station(self):
        """360 mph for 10 s covers exactly 1 mile"""
        contact = self._contact()
        contact.update(10.0)

        assert contact.range_mi == pytest.approx(49.0, abs=1e-9)
        assert contact.bearing_deg == pytest.approx(90.0, abs=1e-9)

    def test_bearing_constant_over_flight(self):
        contact = self._contact(bearing_deg=200.0, speed_mph=250.0)
        for _ in range(100):
            contact.update(6.0)
            assert contact.bearing_deg == pytest.approx(200.0, abs=1e-6)

    def test_range_never_negative(self):
        contact = self._contact(range_mi=2.0, speed_mph=3600.0)
        contact.update(3600.0)

        assert contact.range_mi == 0.0
        assert np.all(np.isfinite(contact.position))

    def test_heading_is_reciprocal(self):
        contact = self._contact(bearing_deg=160.0)
        assert contact.heading_deg == pytest.approx(340.0)

    def test_to_dict(self):
        data = self._contact().to_dict()

        assert data["id"] == 7
        assert data["aircraft"] == "Ju 88"
        assert data["is_escort"] is False
        assert data["formation_size"] == 6
        assert data["range_mi"] == pytest.approx(50.0)
        assert len(data["position"]) == 2


# =============================================================================
# TEST 4: Goniometer
# =============================================================================


class TestGoniometer:
    """Angle bounded to the scan sector."""

    def test_default_is_sector_centre(self):
        gonio = Goniometer()
        assert gonio.angle_deg == 160.0
        assert (gonio.min_deg, gonio.max_deg) == (110.0, 210.0)

    @pytest.mark.parametrize(
        "requested, expected",
        [(150.0, 150.0), (250.0, 210.0), (50.0, 110.0), (float("nan"), 110.0)],
    )
    def test_clamped(self, requested, expected):
        gonio = Goniometer()
        gonio.angle_deg = requested
        assert gonio.angle_deg == expected

    def test_custom_sector(self):
        gonio = Goniometer(angle_deg=0.0, sector_centre_deg=90.0, sector_half_width_deg=30.0)
        assert gonio.angle_deg == 60.0


# =============================================================================
# TEST 5: Generator Bounds
# =============================================================================


class TestTargetGenerator:
    """Randomised but constrained raid attributes."""

    @pytest.fixture
    def contacts(self):
        generator = TargetGenerator(rng=np.random.default_rng(1940))
        return [generator.spawn(60.0, 150.0) for _ in range(400)]

    def test_ids_unique_and_sequential(self, contacts):
        assert [c.contact_id for c in contacts] == list(range(1, 401))

    def test_position_from_caller(self, contacts):
        for c in contacts:
            assert c.range_mi == pytest.approx(60.0)
            assert c.bearing_deg == pytest.approx(150.0)

    def test_speed_and_altitude_within_class(self, contacts):
        for c in contacts:
            lo, hi = c.aircraft_class.speed_range_mph
            assert lo <= c.speed_mph <= hi
            lo, hi = c.aircraft_class.altitude_range_ft
            assert lo <= c.altitude_ft <= hi

    def test_formation_sizes(self, contacts):
        for c in contacts:
            if c.is_escort:
                assert 1 <= c.formation_size <= 2
            else:
                assert 3 <= c.formation_size <= 10

    def test_escort_fraction(self, contacts):
        """30% escort probability, loose statistical bound"""
        fraction = sum(c.is_escort for c in contacts) / len(contacts)
        assert 0.2 < fraction < 0.4

    def test_forced_missions(self):
        all_escort = TargetGenerator(rng=np.random.default_rng(0), escort_probability=1.0)
        no_escort = TargetGenerator(rng=np.random.default_rng(0), escort_probability=0.0)

        assert all(all_escort.spawn(50.0, 160.0).is_escort for _ in range(50))
        assert not any(no_escort.spawn(50.0, 160.0).is_escort for _ in range(50))


# =============================================================================
# TEST 6: Empty Pools
# =============================================================================


class TestGeneratorSetup:
    """A class table must hold both escort and bomber types."""

    def test_no_escorts(self):
        bombers = [c for c in AIRCRAFT_CLASSES if not c.is_escort]
        with pytest.raises(ValueError, match="escort"):
            TargetGenerator(aircraft_classes=bombers)

    def test_no_bombers(self):
        escorts = [c for c in AIRCRAFT_CLASSES if c.is_escort]
        with pytest.raises(ValueError, match="bomber"):
            TargetGenerator(aircraft_classes=escorts)

    def test_custom_table(self):
        table = [
            AircraftClass("Fighter", (300.0, 300.0), (20000.0, 20000.0), is_escort=True),
            AircraftClass("Bomber", (200.0, 200.0), (10000.0, 10000.0), is_escort=False),
        ]
        generator = TargetGenerator(rng=np.random.default_rng(3), aircraft_classes=table)
        contact = generator.spawn(40.0, 180.0)

        expected_speed = 300.0 if contact.is_escort else 200.0
        assert contact.speed_mph == expected_speed


# =============================================================================
# TEST 7: Determinism
# =============================================================================


class TestDeterminism:
    def test_same_seed_same_raids(self):
        a = TargetGenerator(rng=np.random.default_rng(42))
        b = TargetGenerator(rng=np.random.default_rng(42))

        for _ in range(20):
            ca = a.spawn(70.0, 140.0)
            cb = b.spawn(70.0, 140.0)
            assert ca.aircraft_class == cb.aircraft_class
            assert ca.speed_mph == cb.speed_mph
            assert ca.altitude_ft == cb.altitude_ft
            assert ca.formation_size == cb.formation_size
            assert not math.isnan(ca.speed_mph)
