"""
Station Engine

Simulation context for one Chain Home station.

Owns the live contacts, goniometer, sweep state machine and trace
history. The engine is driven by explicit tick functions that take the
elapsed time as a parameter, so it runs identically under the Qt timers
of the live console, the headless runner and the test suite.

Features:
    - Power cycle: fresh contact population on power-up, full reset on power-down
    - Motion tick: kinematics, retirement and replenishment
    - Sweep tick: progress advance, trace finalisation, persistence history
    - Read-only snapshot for the presentation layer
"""

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from chainhome.io.config_loader import StationConfig
from chainhome.physics.signal_model import signal_strengths

from .generator import TargetGenerator
from .motion import MotionIntegrator
from .objects import Contact, Goniometer
from .sweep import SweepState, SweepStateMachine, Trace, TraceHistory, TraceSampler

logger = logging.getLogger(__name__)


class StationEngine:
    """
    Main simulation context - the single owner of mutable station state.

    Mutation happens only through power_on/power_off, set_goniometer,
    step_motion and step_sweep. Everything else reads.
    """

    def __init__(
        self,
        config: Optional[StationConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize station engine.

        Args:
            config: Station configuration (defaults if None)
            seed: Random seed; overrides config.seed
            rng: Random source for raids; overrides both seeds. Trace noise
                uses a child stream spawned from it.

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or StationConfig()
        self.config.validate()

        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else self.config.seed)
        self.rng = rng
        # Grass noise has its own stream so rendering never shifts the raid sequence
        self.noise_rng = rng.spawn(1)[0]

        pop = self.config.population
        sector = self.config.sector
        sweep = self.config.sweep

        self.generator = TargetGenerator(rng=self.rng, escort_probability=pop.escort_probability)
        self.integrator = MotionIntegrator(
            self.generator,
            rng=self.rng,
            min_range_mi=pop.min_range_mi,
            max_range_mi=pop.max_range_mi,
            sector_centre_deg=sector.centre_deg,
            sector_half_width_deg=sector.half_width_deg,
            population_floor=pop.floor,
        )
        self.goniometer = Goniometer(
            angle_deg=sector.centre_deg,
            sector_centre_deg=sector.centre_deg,
            sector_half_width_deg=sector.half_width_deg,
        )
        self.sweep = SweepStateMachine(width=sweep.width, duration_s=sweep.duration_s)
        self.sampler = TraceSampler(
            width=sweep.width,
            display_range_mi=sweep.display_range_mi,
            sample_step=sweep.sample_step,
            beam_width_mi=sweep.beam_width_mi,
            pixel_scale=sweep.pixel_scale,
            noise_amplitude=sweep.noise_amplitude,
            max_deflection=sweep.max_deflection,
            params=self.config.signal,
            altitude_limits=self.config.altitude,
        )
        self.history: Optional[TraceHistory] = (
            TraceHistory(sweep.history_cap) if sweep.persistence_enabled else None
        )

        # Station state
        self.powered = False
        self.contacts: List[Contact] = []
        self.finalized_trace: Optional[Trace] = None
        self.simulation_time = 0.0

    # ═══════════════════════════════════════════════════════════════════════
    # CONTROLS
    # ═══════════════════════════════════════════════════════════════════════

    def power_on(self) -> None:
        """Power up: spawn a fresh population and start sweeping."""
        if self.powered:
            return

        pop = self.config.population
        count = int(self.rng.integers(pop.initial_min, pop.initial_max + 1))
        self.contacts = self.integrator.populate(count)
        self.simulation_time = 0.0
        self.powered = True
        self.sweep.power_on()

        logger.info("%s powered on with %d contacts", self.config.name, count)

    def power_off(self) -> None:
        """Power down from any state, discarding all transient state."""
        self.powered = False
        self.sweep.power_off()
        self.contacts = []
        self.finalized_trace = None
        if self.history is not None:
            self.history.clear()

        logger.info("%s powered off", self.config.name)

    def set_goniometer(self, angle_deg: float) -> float:
        """
        Steer the goniometer.

        Args:
            angle_deg: Requested angle [deg]

        Returns:
            Actual angle after clamping to the scan sector
        """
        self.goniometer.angle_deg = angle_deg
        return self.goniometer.angle_deg

    # ═══════════════════════════════════════════════════════════════════════
    # TICKS
    # ═══════════════════════════════════════════════════════════════════════

    def step_motion(self, dt: float) -> None:
        """
        Motion tick.

        Args:
            dt: Wall-clock time since the previous motion tick [s];
                scaled by the configured time compression
        """
        if not self.powered:
            return

        sim_dt = dt * self.config.timing.time_compression
        self.contacts = self.integrator.step(self.contacts, sim_dt)
        self.simulation_time += sim_dt

    def step_sweep(self, elapsed: float) -> bool:
        """
        Sweep tick.

        Args:
            elapsed: Wall-clock time since the previous sweep tick [s]

        Returns:
            True if a sweep completed on this tick
        """
        if not self.powered:
            return False

        sweep_cfg = self.config.sweep
        if (
            self.sweep.state == SweepState.TRACE_READY
            and sweep_cfg.auto_repeat
            and self.sweep.ready_elapsed_s >= sweep_cfg.hold_s
        ):
            self.sweep.start_cycle()

        completed = self.sweep.tick(elapsed)
        if completed:
            self._finalize_trace()
        return completed

    def start_cycle(self) -> None:
        """Manually start the next sweep (when auto-repeat is off)."""
        if self.powered:
            self.sweep.start_cycle()

    def _finalize_trace(self) -> None:
        """Sample the full-width trace and archive it."""
        trace = self.sampler.sample(
            self.contacts, self.goniometer.angle_deg, self.sweep.width, self.noise_rng
        )
        self.finalized_trace = trace
        if self.history is not None:
            self.history.append(trace)

        peak = trace.peak()
        logger.info(
            "Sweep %d complete: %d contacts, peak %.1f at %.1f mi",
            self.sweep.cycle_count,
            len(self.contacts),
            peak["deflection"],
            peak["range_mi"],
        )

    # ═══════════════════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════════════════

    def render_trace(self) -> Optional[Trace]:
        """
        Sample the trace up to the current sweep progress.

        Called once per display frame. Does not modify station state.

        Returns:
            Trace, or None while unpowered
        """
        if not self.powered:
            return None
        return self.sampler.sample(
            list(self.contacts), self.goniometer.angle_deg, self.sweep.progress, self.noise_rng
        )

    def contact_strengths(self) -> np.ndarray:
        """Signal strength of each live contact at the current goniometer setting."""
        return signal_strengths(
            self.contacts, self.goniometer.angle_deg, self.config.altitude, self.config.signal
        )

    @property
    def trace_visible(self) -> bool:
        """True once a sweep has completed since the last power-up."""
        return self.powered and self.finalized_trace is not None

    def snapshot(self, include_trace: bool = True) -> Dict[str, Any]:
        """
        Build a state dictionary for the presentation layer.

        All values are copies; the caller may keep or modify them freely.

        Args:
            include_trace: Sample and include the live trace

        Returns:
            Dict containing everything needed for display
        """
        strengths = self.contact_strengths() if self.contacts else np.zeros(0)
        contacts = []
        for contact, strength in zip(self.contacts, strengths):
            data = contact.to_dict()
            data["signal_strength"] = float(strength)
            contacts.append(data)

        trace = self.render_trace() if include_trace else None
        history = self.history.to_list() if self.history is not None else []

        return {
            "time": self.simulation_time,
            "powered": self.powered,
            "trace_visible": self.trace_visible,
            "state": self.sweep.state.value,
            "progress": self.sweep.progress,
            "sweep_width": self.sweep.width,
            "cycle_count": self.sweep.cycle_count,
            "goniometer_deg": self.goniometer.angle_deg,
            "sector": self.config.sector.limits,
            "display_range_mi": self.config.sweep.display_range_mi,
            "contacts": contacts,
            "trace": trace.to_dict() if trace is not None else None,
            "history": [t.to_dict() for t in history],
        }
