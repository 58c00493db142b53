"""
A-Scope (Amplitude Scope) Display

Chain Home receiver trace: echo deflection vs range.

Shows:
    - Live trace drawn up to the current sweep position
    - Faded persistence overlays of previous sweeps
    - Baseline and range scale in miles

The trace hangs from a baseline like the original CRT; echoes deflect
upwards here for readability.
"""

from typing import Any, Dict, List

import numpy as np
import pyqtgraph as pg
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget


class AScope(QWidget):
    """
    A-Scope display.

    Features:
        - Real-time trace from the engine snapshot
        - Persistence overlays (oldest faintest)
        - Goniometer and sweep readout
    """

    COLOR_TRACE = (120, 255, 140)
    COLOR_HISTORY = (60, 200, 90)

    def __init__(
        self, max_range_mi: float = 100.0, max_deflection: float = 150.0, parent: QWidget = None
    ):
        """
        Initialize A-scope.

        Args:
            max_range_mi: Range at the right-hand edge [mi]
            max_deflection: Top of the display [display units]
            parent: Parent widget
        """
        super().__init__(parent)
        self.max_range_mi = max_range_mi
        self.max_deflection = max_deflection

        self._history_curves: List[pg.PlotCurveItem] = []

        self._setup_ui()

    def _setup_ui(self):
        """Setup the UI components."""
        self.setMinimumHeight(220)
        self.setStyleSheet("background-color: rgb(10, 20, 15);")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(2)

        header_layout = QHBoxLayout()

        header_label = QLabel("RECEIVER: A-SCOPE")
        header_label.setStyleSheet(
            """
            QLabel {
                color: #00dd66;
                font-family: 'Consolas', monospace;
                font-size: 12px;
                font-weight: bold;
            }
        """
        )
        header_layout.addWidget(header_label)
        header_layout.addStretch()

        self.status_label = QLabel("GONIO: ---   SWEEP: ---")
        self.status_label.setStyleSheet(
            """
            QLabel {
                color: #00aa44;
                font-family: 'Consolas', monospace;
                font-size: 11px;
            }
        """
        )
        header_layout.addWidget(self.status_label)

        layout.addLayout(header_layout)

        pg.setConfigOptions(antialias=True)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground(QColor(10, 20, 15))
        self.plot_widget.showGrid(x=True, y=False, alpha=0.3)
        self.plot_widget.setLabel("bottom", "Range", units="mi")
        self.plot_widget.hideAxis("left")

        self.plot_widget.getAxis("bottom").setPen(pg.mkPen(color=(0, 150, 75)))
        self.plot_widget.getAxis("bottom").setTextPen(pg.mkPen(color=(0, 150, 75)))

        self.plot_widget.setXRange(0, self.max_range_mi, padding=0.01)
        self.plot_widget.setYRange(0, self.max_deflection, padding=0.05)
        self.plot_widget.setMouseEnabled(x=False, y=False)

        layout.addWidget(self.plot_widget)

        # Baseline
        self.baseline = pg.InfiniteLine(pos=0, angle=0, pen=pg.mkPen(color=(0, 90, 45), width=1))
        self.plot_widget.addItem(self.baseline)

        # Live trace on top of the persistence curves
        self.trace_curve = pg.PlotCurveItem(pen=pg.mkPen(color=self.COLOR_TRACE, width=2))
        self.trace_curve.setZValue(10)
        self.plot_widget.addItem(self.trace_curve)

    def _ensure_history_curves(self, count: int) -> None:
        while len(self._history_curves) < count:
            curve = pg.PlotCurveItem()
            self.plot_widget.addItem(curve)
            self._history_curves.append(curve)

    def update_display(self, state: Dict[str, Any]):
        """
        Update display with new station state.

        Args:
            state: Snapshot dictionary from StationEngine
        """
        powered = state.get("powered", False)
        gonio = state.get("goniometer_deg", 0.0)
        width = state.get("sweep_width", 1) or 1
        progress = state.get("progress", 0.0)

        if powered:
            self.status_label.setText(
                f"GONIO: {gonio:5.1f}°   SWEEP: {100.0 * progress / width:3.0f}%"
            )
        else:
            self.status_label.setText(f"GONIO: {gonio:5.1f}°   OFF")

        trace = state.get("trace")
        if trace:
            self.trace_curve.setData(
                np.asarray(trace["ranges_mi"]), np.asarray(trace["deflections"])
            )
        else:
            self.trace_curve.setData([], [])

        self._update_history(state.get("history", []))

    def _update_history(self, history: List[Dict[str, Any]]) -> None:
        """Draw persistence overlays, oldest faintest."""
        self._ensure_history_curves(len(history))
        n = len(history)

        for i, curve in enumerate(self._history_curves):
            if i < n:
                alpha = int(30 + 70 * (i + 1) / n)
                curve.setPen(pg.mkPen(color=(*self.COLOR_HISTORY, alpha), width=1))
                curve.setData(
                    np.asarray(history[i]["ranges_mi"]), np.asarray(history[i]["deflections"])
                )
            else:
                curve.setData([], [])
