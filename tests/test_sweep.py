"""
Chain Home Sweep and A-Scope Trace Test Suite

Tests for the scan-cycle state machine, trace sampling and the
persistence history.

Test ID | Description                          | Reference                      | Tolerance
--------|--------------------------------------|--------------------------------|-----------
1       | State transitions                    | IDLE → SWEEPING → TRACE_READY  | -
2       | Progress monotonic within a cycle    | width × t / duration           | exact
3       | Reset on power-off and new cycle     | progress = 0                   | exact
4       | Pulse centred on contact range       | Triangular pulse, no noise     | ±1e-6
5       | Deflection saturates, noise bounded  | 0 <= y <= max_deflection       | exact
6       | History FIFO eviction                | size <= cap, oldest first out  | -
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chainhome.physics.signal_model import SignalParameters
from chainhome.simulation.objects import AIRCRAFT_CLASSES, Contact
from chainhome.simulation.sweep import (
    SweepState,
    SweepStateMachine,
    Trace,
    TraceHistory,
    TraceSampler,
)


def make_contact(range_mi, bearing_deg=160.0, altitude_ft=30000.0, formation_size=1):
    return Contact(
        contact_id=1,
        range_mi=range_mi,
        bearing_deg=bearing_deg,
        speed_mph=220.0,
        altitude_ft=altitude_ft,
        aircraft_class=AIRCRAFT_CLASSES[2],
        formation_size=formation_size,
    )


def make_trace(tag: float) -> Trace:
    positions = np.arange(0.0, 10.0, 2.0)
    return Trace(
        positions=positions,
        ranges_mi=positions / 10.0,
        deflections=np.zeros_like(positions),
        progress=tag,
    )


# =============================================================================
# TEST 1: State Transitions
# =============================================================================


class TestSweepStates:
    """Cycle lifecycle driven by elapsed time."""

    def test_initially_idle(self):
        sweep = SweepStateMachine()
        assert sweep.state == SweepState.IDLE
        assert sweep.tick(1.0) is False
        assert sweep.progress == 0.0

    def test_full_cycle(self):
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()
        assert sweep.state == SweepState.SWEEPING

        assert sweep.tick(1.0) is False
        assert sweep.progress == 600.0

        assert sweep.tick(0.5) is False
        assert sweep.progress == 900.0

        assert sweep.tick(0.5) is True
        assert sweep.state == SweepState.TRACE_READY
        assert sweep.progress == 1200.0
        assert sweep.cycle_count == 1

    def test_completion_reported_once(self):
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()

        assert sweep.tick(5.0) is True
        assert sweep.tick(0.1) is False
        assert sweep.progress == 1200.0
        assert sweep.ready_elapsed_s == pytest.approx(0.1)

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            SweepStateMachine(width=0)
        with pytest.raises(ValueError):
            SweepStateMachine(duration_s=0.0)


# =============================================================================
# TEST 2: Monotonic Progress
# =============================================================================


class TestProgress:
    """Progress never decreases within a cycle."""

    def test_monotonic_with_jitter(self):
        rng = np.random.default_rng(5)
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()

        last = 0.0
        while sweep.state == SweepState.SWEEPING:
            sweep.tick(float(rng.uniform(-0.01, 0.05)))
            assert sweep.progress >= last
            assert sweep.progress <= 1200.0
            last = sweep.progress

        assert sweep.state == SweepState.TRACE_READY

    def test_fraction(self):
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()
        sweep.tick(0.5)
        assert sweep.fraction == pytest.approx(0.25)


# =============================================================================
# TEST 3: Resets
# =============================================================================


class TestResets:
    """Progress resets to zero exactly on power-off or a new cycle."""

    def test_power_off_mid_sweep(self):
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()
        sweep.tick(1.0)
        assert sweep.progress == 600.0

        sweep.power_off()

        assert sweep.state == SweepState.IDLE
        assert sweep.progress == 0.0
        assert sweep.tick(1.0) is False
        assert sweep.progress == 0.0

    def test_new_cycle(self):
        sweep = SweepStateMachine(width=1200, duration_s=2.0)
        sweep.power_on()
        sweep.tick(2.0)
        sweep.tick(0.3)

        sweep.start_cycle()

        assert sweep.state == SweepState.SWEEPING
        assert sweep.progress == 0.0
        assert sweep.ready_elapsed_s == 0.0
        assert sweep.cycle_count == 1


# =============================================================================
# TEST 4: Trace Sampling
# =============================================================================


class TestTraceSampler:
    """Strongest in-window contact drawn as a triangular pulse."""

    @pytest.fixture
    def quiet_sampler(self):
        return TraceSampler(noise_amplitude=0.0)

    def test_sample_count(self):
        sampler = TraceSampler()
        assert len(sampler.sample([], 160.0, 1200.0)) == 601
        assert len(sampler.sample([], 160.0, 600.0)) == 301
        assert len(sampler.sample([], 160.0, 0.0)) == 1

    def test_partial_progress_upper_bound(self):
        trace = TraceSampler().sample([make_contact(80.0)], 160.0, 600.0)
        assert trace.positions[-1] <= 600.0
        assert trace.ranges_mi[-1] == pytest.approx(50.0)

    def test_pulse_at_contact_range(self, quiet_sampler):
        """1.5 amplitude × 40 px = 60 at 50 mi"""
        trace = quiet_sampler.sample([make_contact(50.0)], 160.0, 1200.0)
        peak = trace.peak()

        assert peak["range_mi"] == pytest.approx(50.0)
        assert peak["deflection"] == pytest.approx(60.0, rel=1e-6)

    def test_pulse_confined_to_beam_width(self, quiet_sampler):
        trace = quiet_sampler.sample([make_contact(50.0)], 160.0, 1200.0)

        outside = np.abs(trace.ranges_mi - 50.0) > 2.0
        assert np.all(trace.deflections[outside] == 0.0)
        assert np.all(trace.deflections[~outside] >= 0.0)

    def test_strongest_contact_wins(self, quiet_sampler):
        on_bearing = make_contact(50.0, bearing_deg=160.0)
        off_bearing = make_contact(50.0, bearing_deg=190.0)

        both = quiet_sampler.sample([off_bearing, on_bearing], 160.0, 1200.0)
        alone = quiet_sampler.sample([on_bearing], 160.0, 1200.0)

        np.testing.assert_allclose(both.deflections, alone.deflections)

    def test_contact_behind_goniometer_is_silent(self, quiet_sampler):
        trace = quiet_sampler.sample([make_contact(50.0, bearing_deg=210.0)], 110.0, 1200.0)
        assert np.all(trace.deflections == 0.0)

    def test_saturates_at_max_deflection(self):
        sampler = TraceSampler(
            pixel_scale=1000.0,
            params=SignalParameters(base_gain=50.0),
        )
        trace = sampler.sample([make_contact(30.0, formation_size=10)], 160.0, 1200.0)

        assert trace.deflections.max() == 150.0
        assert np.all(trace.deflections <= 150.0)

    def test_grass_noise_bounds(self):
        sampler = TraceSampler(noise_amplitude=6.0)
        trace = sampler.sample([], 160.0, 1200.0, rng=np.random.default_rng(0))

        assert np.all(trace.deflections >= 0.0)
        assert np.all(trace.deflections <= 6.0)
        assert trace.deflections.std() > 0.0

    def test_read_only_and_repeatable(self):
        sampler = TraceSampler()
        contacts = [make_contact(40.0), make_contact(70.0, bearing_deg=150.0)]
        before = [c.position.copy() for c in contacts]

        a = sampler.sample(contacts, 160.0, 900.0, rng=np.random.default_rng(9))
        b = sampler.sample(contacts, 160.0, 900.0, rng=np.random.default_rng(9))

        np.testing.assert_array_equal(a.deflections, b.deflections)
        for c, pos in zip(contacts, before):
            np.testing.assert_array_equal(c.position, pos)

    def test_trace_copy_is_independent(self):
        trace = TraceSampler().sample([], 160.0, 100.0)
        clone = trace.copy()
        clone.deflections[:] = 99.0

        assert not np.any(trace.deflections == 99.0)
        assert trace.to_dict()["progress"] == 100.0


# =============================================================================
# TEST 6: Persistence History
# =============================================================================


class TestTraceHistory:
    """Bounded FIFO of finalised traces."""

    def test_evicts_oldest(self):
        history = TraceHistory(cap=3)
        for tag in range(1, 6):
            history.append(make_trace(float(tag)))
            assert len(history) <= 3

        assert [t.progress for t in history.to_list()] == [3.0, 4.0, 5.0]
        assert history.latest.progress == 5.0

    def test_clear(self):
        history = TraceHistory(cap=2)
        history.append(make_trace(1.0))
        history.clear()

        assert len(history) == 0
        assert history.latest is None

    def test_iteration_order(self):
        history = TraceHistory(cap=3)
        for tag in (1.0, 2.0):
            history.append(make_trace(tag))

        assert [t.progress for t in history] == [1.0, 2.0]

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            TraceHistory(cap=0)
