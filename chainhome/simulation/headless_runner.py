"""
Headless Station Runner

Runs the station engine without a GUI, stepping simulated wall-clock time
through the same motion and sweep ticks the live console uses.

Features:
    - No GUI dependencies
    - Fixed-step timer emulation (motion timer + frame timer)
    - Optional goniometer swing across the sector
    - Per-sweep summaries (peak deflection and range)

Usage:
    config = HeadlessConfig(duration_s=30.0, seed=7)
    runner = HeadlessRunner(config)
    result = runner.run()
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chainhome.io.config_loader import StationConfig

from .engine import StationEngine

logger = logging.getLogger(__name__)


@dataclass
class HeadlessConfig:
    """
    Configuration for a headless run.

    Attributes:
        station: Station configuration
        duration_s: Wall-clock time to simulate [s]
        goniometer_deg: Initial goniometer angle [deg]
        goniometer_rate_deg_s: Swing rate across the sector [deg/s] (0 = fixed)
        seed: Random seed for reproducibility
    """

    station: StationConfig = field(default_factory=StationConfig)
    duration_s: float = 10.0
    goniometer_deg: float = 160.0
    goniometer_rate_deg_s: float = 0.0
    seed: Optional[int] = None


@dataclass
class SweepSummary:
    """Summary of one completed sweep."""

    index: int
    time_s: float
    goniometer_deg: float
    contact_count: int
    peak_range_mi: float
    peak_deflection: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "time_s": self.time_s,
            "goniometer_deg": self.goniometer_deg,
            "contact_count": self.contact_count,
            "peak_range_mi": self.peak_range_mi,
            "peak_deflection": self.peak_deflection,
        }


@dataclass
class HeadlessResult:
    """
    Results from a headless run.

    Attributes:
        config: Original configuration
        sweeps: One summary per completed sweep
        motion_ticks: Number of motion ticks executed
        contacts_spawned: Contacts spawned by replenishment and power-up
        contacts_retired: Contacts retired on reaching the coast
        min_population: Smallest live population seen after a motion tick
        final_contacts: Contacts alive at the end of the run
        runtime_s: Real execution time [s]
    """

    config: HeadlessConfig
    sweeps: List[SweepSummary] = field(default_factory=list)
    motion_ticks: int = 0
    contacts_spawned: int = 0
    contacts_retired: int = 0
    min_population: int = 0
    final_contacts: List[Dict[str, Any]] = field(default_factory=list)
    runtime_s: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "duration_s": self.config.duration_s,
            "seed": self.config.seed,
            "sweeps_completed": len(self.sweeps),
            "motion_ticks": self.motion_ticks,
            "contacts_spawned": self.contacts_spawned,
            "contacts_retired": self.contacts_retired,
            "min_population": self.min_population,
            "runtime_s": self.runtime_s,
            "sweeps": [s.to_dict() for s in self.sweeps],
            "final_contacts": self.final_contacts,
        }


class HeadlessRunner:
    """
    Headless simulation runner.

    Emulates the two console timers with a fixed frame step: the sweep is
    ticked every frame, the motion integrator whenever a full motion
    period has accumulated.
    """

    def __init__(self, config: HeadlessConfig):
        """
        Initialize headless runner.

        Args:
            config: Run configuration
        """
        self.config = config
        self.engine = StationEngine(config.station, seed=config.seed)

    def run(self) -> HeadlessResult:
        """
        Execute the run.

        Returns:
            HeadlessResult with sweep summaries and population statistics
        """
        start_time = time.perf_counter()

        engine = self.engine
        timing = self.config.station.timing
        frame_dt = timing.frame_period_s
        motion_dt = timing.motion_period_s

        engine.power_off()
        engine.set_goniometer(self.config.goniometer_deg)
        spawned_before = engine.integrator.spawned_count
        retired_before = engine.integrator.retired_count
        engine.power_on()

        result = HeadlessResult(config=self.config, min_population=len(engine.contacts))

        n_frames = int(round(self.config.duration_s / frame_dt))
        motion_accumulator = 0.0
        direction = 1.0

        for frame in range(n_frames):
            now = (frame + 1) * frame_dt

            if self.config.goniometer_rate_deg_s:
                direction = self._swing_goniometer(frame_dt, direction)

            motion_accumulator += frame_dt
            while motion_accumulator >= motion_dt:
                engine.step_motion(motion_dt)
                motion_accumulator -= motion_dt
                result.motion_ticks += 1
                result.min_population = min(result.min_population, len(engine.contacts))

            if engine.step_sweep(frame_dt):
                peak = engine.finalized_trace.peak()
                result.sweeps.append(
                    SweepSummary(
                        index=engine.sweep.cycle_count,
                        time_s=now,
                        goniometer_deg=engine.goniometer.angle_deg,
                        contact_count=len(engine.contacts),
                        peak_range_mi=peak["range_mi"],
                        peak_deflection=peak["deflection"],
                    )
                )

        result.contacts_spawned = engine.integrator.spawned_count - spawned_before
        result.contacts_retired = engine.integrator.retired_count - retired_before
        result.final_contacts = [c.to_dict() for c in engine.contacts]
        result.runtime_s = time.perf_counter() - start_time

        logger.info(
            "Headless run finished: %d sweeps, %d spawned, %d retired in %.3f s",
            len(result.sweeps),
            result.contacts_spawned,
            result.contacts_retired,
            result.runtime_s,
        )
        return result

    def _swing_goniometer(self, dt: float, direction: float) -> float:
        """Swing the goniometer back and forth across the sector."""
        gonio = self.engine.goniometer
        target = gonio.angle_deg + direction * self.config.goniometer_rate_deg_s * dt
        if target >= gonio.max_deg or target <= gonio.min_deg:
            direction = -direction
        self.engine.set_goniometer(target)
        return direction


def run_headless(config: HeadlessConfig) -> HeadlessResult:
    """
    Convenience function for one-shot runs.

    Args:
        config: Run configuration

    Returns:
        Run result
    """
    runner = HeadlessRunner(config)
    return runner.run()
