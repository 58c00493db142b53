"""
Station Controller

Bridge between the station engine and the UI.

Single-threaded: both timers fire on the Qt event loop, so engine state
is only ever touched from the GUI thread and no locking is needed.

Architecture:
    - Motion timer calls engine.step_motion() at a fixed period
    - Frame timer calls engine.step_sweep() with measured elapsed time,
      then emits update_data with a fresh snapshot
    - Power-off stops both timers before the engine is reset
"""

import logging
import time
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from chainhome.simulation.engine import StationEngine

logger = logging.getLogger(__name__)


class StationController(QObject):
    """
    Timer-driven controller for a StationEngine.

    Signals:
        update_data: Emitted every frame with the engine snapshot
        power_changed: Emitted with the new power state
        sweep_completed: Emitted with the cycle count when a sweep finishes
        error: Emitted on error with message
    """

    update_data = pyqtSignal(dict)
    power_changed = pyqtSignal(bool)
    sweep_completed = pyqtSignal(int)
    error = pyqtSignal(str)

    def __init__(self, engine: StationEngine, parent: Optional[QObject] = None):
        """
        Initialize controller.

        Args:
            engine: Station engine to drive
            parent: Parent QObject
        """
        super().__init__(parent)
        self.engine = engine
        timing = engine.config.timing

        self._motion_period_s = timing.motion_period_s
        self._motion_timer = QTimer(self)
        self._motion_timer.setInterval(int(round(timing.motion_period_s * 1000)))
        self._motion_timer.timeout.connect(self._on_motion_tick)

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, int(round(timing.frame_period_s * 1000))))
        self._frame_timer.timeout.connect(self._on_frame_tick)

        self._last_frame = time.perf_counter()

    @property
    def is_powered(self) -> bool:
        return self.engine.powered

    def set_powered(self, powered: bool) -> None:
        """Power the station up or down."""
        if powered == self.engine.powered:
            return

        if powered:
            self.engine.power_on()
            self._last_frame = time.perf_counter()
            self._motion_timer.start()
            self._frame_timer.start()
        else:
            # Timers stop first so no tick can land after the reset
            self._motion_timer.stop()
            self._frame_timer.stop()
            self.engine.power_off()

        self.power_changed.emit(powered)
        self.update_data.emit(self.engine.snapshot())

    def set_goniometer(self, angle_deg: float) -> None:
        """Steer the goniometer; takes effect on the next frame."""
        self.engine.set_goniometer(angle_deg)
        if not self.engine.powered:
            self.update_data.emit(self.engine.snapshot(include_trace=False))

    def stop(self) -> None:
        """Stop timers without touching engine state (window close)."""
        self._motion_timer.stop()
        self._frame_timer.stop()

    def _on_motion_tick(self) -> None:
        try:
            self.engine.step_motion(self._motion_period_s)
        except Exception as e:
            logger.exception("Motion tick failed")
            self.error.emit(str(e))
            self.stop()

    def _on_frame_tick(self) -> None:
        now = time.perf_counter()
        elapsed = now - self._last_frame
        self._last_frame = now

        try:
            if self.engine.step_sweep(elapsed):
                self.sweep_completed.emit(self.engine.sweep.cycle_count)
            self.update_data.emit(self.engine.snapshot())
        except Exception as e:
            logger.exception("Frame tick failed")
            self.error.emit(str(e))
            self.stop()
