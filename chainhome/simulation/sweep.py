"""
Sweep State Machine and A-Scope Trace Sampling

Drives the time-based scan cycle of the station and turns the signal
model into an A-scope trace.

States:
    IDLE         Station unpowered, no scanning
    SWEEPING     Progress advancing 0 → sweep width over the sweep duration
    TRACE_READY  Progress reached the sweep width, trace finalised

Trace sampling walks the range axis from 0 to the current progress. At
each sample the strongest contact within the range window is drawn as a
triangular pulse on top of a low random "grass" noise floor, saturating
at the top of the display.

Reference: Bowen, "Radar Days", Ch. 3 (CH receiver display)
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterator, List, Optional, Sequence

import numpy as np

from chainhome.physics.constants import (
    MAX_SIMULATED_RANGE_MI,
    RANGE_BEAM_WIDTH_MI,
    SWEEP_DURATION_S,
    SWEEP_WIDTH,
    TRACE_HISTORY_CAP,
)
from chainhome.physics.signal_model import AltitudeLimits, SignalParameters, signal_strengths

from .objects import Contact

logger = logging.getLogger(__name__)


class SweepState(Enum):
    """Scan cycle states."""

    IDLE = "idle"
    SWEEPING = "sweeping"
    TRACE_READY = "trace_ready"


class SweepStateMachine:
    """
    Time-driven scan cycle.

    Progress is derived from the elapsed time accumulated since the cycle
    started, so it is monotonic within a cycle regardless of tick jitter.
    """

    def __init__(self, width: int = SWEEP_WIDTH, duration_s: float = SWEEP_DURATION_S):
        """
        Initialize state machine.

        Args:
            width: Sweep width [samples]
            duration_s: Time for one sweep [s]

        Raises:
            ValueError: On non-positive width or duration
        """
        if width <= 0:
            raise ValueError(f"Sweep width must be positive, got {width}")
        if duration_s <= 0:
            raise ValueError(f"Sweep duration must be positive, got {duration_s}")

        self.width = width
        self.duration_s = duration_s

        self.state = SweepState.IDLE
        self.progress = 0.0
        self.cycle_count = 0
        self._elapsed_s = 0.0
        self._ready_elapsed_s = 0.0

    def power_on(self) -> None:
        """Start the first sweep."""
        self.start_cycle()

    def power_off(self) -> None:
        """Return to IDLE from any state."""
        self.state = SweepState.IDLE
        self.progress = 0.0
        self._elapsed_s = 0.0
        self._ready_elapsed_s = 0.0

    def start_cycle(self) -> None:
        """Begin a new sweep from zero progress."""
        self.state = SweepState.SWEEPING
        self.progress = 0.0
        self._elapsed_s = 0.0
        self._ready_elapsed_s = 0.0

    def tick(self, elapsed_s: float) -> bool:
        """
        Advance the sweep by elapsed wall-clock time.

        Args:
            elapsed_s: Time since the previous tick [s]

        Returns:
            True on the tick the sweep completes, False otherwise
        """
        if self.state == SweepState.TRACE_READY:
            self._ready_elapsed_s += max(0.0, elapsed_s)
            return False
        if self.state != SweepState.SWEEPING:
            return False

        self._elapsed_s += max(0.0, elapsed_s)
        self.progress = min(float(self.width), self.width * self._elapsed_s / self.duration_s)

        if self.progress >= self.width:
            self.state = SweepState.TRACE_READY
            self.cycle_count += 1
            return True
        return False

    @property
    def ready_elapsed_s(self) -> float:
        """Time spent in TRACE_READY since the sweep completed [s]."""
        return self._ready_elapsed_s

    @property
    def fraction(self) -> float:
        """Progress as a fraction of the sweep width."""
        return self.progress / self.width


# =============================================================================
# TRACE
# =============================================================================


@dataclass
class Trace:
    """
    A-scope trace: deflection vs sweep position.

    Attributes:
        positions: Sample positions along the sweep [samples]
        ranges_mi: Range of each sample [mi]
        deflections: Vertical deflection above the baseline [display units]
        progress: Sweep progress the trace was sampled at
    """

    positions: np.ndarray
    ranges_mi: np.ndarray
    deflections: np.ndarray
    progress: float = 0.0

    def __len__(self) -> int:
        return len(self.positions)

    def peak(self) -> Dict[str, float]:
        """Largest deflection and where it occurs."""
        if len(self.deflections) == 0:
            return {"range_mi": 0.0, "deflection": 0.0}
        idx = int(np.argmax(self.deflections))
        return {
            "range_mi": float(self.ranges_mi[idx]),
            "deflection": float(self.deflections[idx]),
        }

    def copy(self) -> "Trace":
        return Trace(
            positions=self.positions.copy(),
            ranges_mi=self.ranges_mi.copy(),
            deflections=self.deflections.copy(),
            progress=self.progress,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the UI."""
        return {
            "positions": self.positions.tolist(),
            "ranges_mi": self.ranges_mi.tolist(),
            "deflections": self.deflections.tolist(),
            "progress": self.progress,
        }


@dataclass
class TraceSampler:
    """
    Converts contacts and goniometer setting into an A-scope trace.

    Attributes:
        width: Sweep width [samples]
        display_range_mi: Range represented by the full sweep width [mi]
        sample_step: Spacing between samples [samples]
        beam_width_mi: Half-width of the range matching window [mi]
        pixel_scale: Display units per unit of amplitude
        noise_amplitude: Peak of the uniform grass noise [display units]
        max_deflection: Top of the display [display units]
        params: Signal model parameters
        altitude_limits: Altitude band for the signal model
    """

    width: int = SWEEP_WIDTH
    display_range_mi: float = MAX_SIMULATED_RANGE_MI
    sample_step: float = 2.0
    beam_width_mi: float = RANGE_BEAM_WIDTH_MI
    pixel_scale: float = 40.0
    noise_amplitude: float = 6.0
    max_deflection: float = 150.0
    params: SignalParameters = field(default_factory=SignalParameters)
    altitude_limits: AltitudeLimits = field(default_factory=AltitudeLimits)

    def sample(
        self,
        contacts: Sequence[Contact],
        goniometer_deg: float,
        progress: float,
        rng: Optional[np.random.Generator] = None,
    ) -> Trace:
        """
        Sample the trace from zero up to the given progress.

        Read-only with respect to the contacts; repeated calls differ only
        by the noise draw.

        Args:
            contacts: Live contacts
            goniometer_deg: Goniometer setting [deg]
            progress: Upper bound of the sweep [samples]
            rng: Random source for grass noise

        Returns:
            Trace
        """
        rng = rng if rng is not None else np.random.default_rng()

        upper = min(max(0.0, float(progress)), float(self.width))
        positions = np.arange(0.0, upper + 1e-9, self.sample_step)
        ranges = positions / self.width * self.display_range_mi

        pulse = np.zeros_like(ranges)
        if len(contacts) > 0:
            amps = signal_strengths(contacts, goniometer_deg, self.altitude_limits, self.params)
            contact_ranges = np.array([c.range_mi for c in contacts], dtype=np.float64)

            # (n_contacts, n_samples)
            dr = np.abs(ranges[np.newaxis, :] - contact_ranges[:, np.newaxis])
            in_window = dr <= self.beam_width_mi
            masked = np.where(in_window, amps[:, np.newaxis], -np.inf)

            best = np.argmax(masked, axis=0)
            cols = np.arange(len(ranges))
            best_amp = masked[best, cols]
            has_echo = np.isfinite(best_amp)
            best_amp = np.where(has_echo, best_amp, 0.0)

            shape = np.clip(1.0 - dr[best, cols] / self.beam_width_mi, 0.0, 1.0)
            pulse = best_amp * shape

        grass = rng.uniform(0.0, self.noise_amplitude, size=len(ranges))
        deflections = np.clip(pulse * self.pixel_scale + grass, 0.0, self.max_deflection)

        return Trace(positions=positions, ranges_mi=ranges, deflections=deflections, progress=upper)


# =============================================================================
# PERSISTENCE HISTORY
# =============================================================================


class TraceHistory:
    """
    Bounded FIFO of finalised traces for the phosphor persistence overlay.

    Size never exceeds the cap; when full, the oldest trace is dropped.
    """

    def __init__(self, cap: int = TRACE_HISTORY_CAP):
        if cap < 1:
            raise ValueError(f"History cap must be at least 1, got {cap}")
        self.cap = cap
        self._traces: Deque[Trace] = deque(maxlen=cap)

    def append(self, trace: Trace) -> None:
        self._traces.append(trace)

    def clear(self) -> None:
        self._traces.clear()

    @property
    def latest(self) -> Optional[Trace]:
        return self._traces[-1] if self._traces else None

    def to_list(self) -> List[Trace]:
        """Traces oldest first."""
        return list(self._traces)

    def __len__(self) -> int:
        return len(self._traces)

    def __iter__(self) -> Iterator[Trace]:
        return iter(self._traces)
