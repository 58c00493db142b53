"""
Plan View Display

Bearing/range map derived from the live contact list.

Features:
    - Range rings every 20 miles
    - Scan sector wedge and goniometer bearing line
    - Contact blips sized by formation, coloured escort/bomber
    - Blip brightness follows current signal strength

Display only; nothing here feeds back into the engine.
"""

import math
from typing import Any, Dict, Tuple

import numpy as np
import pyqtgraph as pg
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget


def _to_xy(range_mi: float, bearing_deg: float) -> Tuple[float, float]:
    """(range, compass bearing) -> plot coordinates (east, north)."""
    theta = math.radians(bearing_deg)
    return range_mi * math.sin(theta), range_mi * math.cos(theta)


class PPIScope(QWidget):
    """
    Plan Position Indicator for the station's sector.

    Military dark theme, north up, station at the origin.
    """

    COLOR_BACKGROUND = QColor(5, 15, 10)
    COLOR_GRID = (0, 60, 30)
    COLOR_SECTOR = (0, 140, 70)
    COLOR_GONIO = (255, 200, 0, 200)
    COLOR_BOMBER = (255, 68, 68)
    COLOR_ESCORT = (0, 191, 255)

    def __init__(
        self,
        max_range_mi: float = 100.0,
        sector: Tuple[float, float] = (110.0, 210.0),
        parent: QWidget = None,
    ):
        """
        Initialize plan view.

        Args:
            max_range_mi: Outer range ring [mi]
            sector: (min, max) scan sector bearings [deg]
            parent: Parent widget
        """
        super().__init__(parent)
        self.max_range_mi = max_range_mi
        self.sector = sector

        self._setup_ui()

    def _setup_ui(self):
        """Setup the UI components."""
        self.setMinimumSize(400, 400)
        self.setStyleSheet("background-color: rgb(5, 15, 10);")

        pg.setConfigOptions(antialias=True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        header = QLabel("PLAN VIEW")
        header.setStyleSheet(
            """
            QLabel {
                color: #00ff64;
                font-family: 'Consolas', monospace;
                font-size: 14px;
                font-weight: bold;
                padding: 5px;
                background-color: rgba(0, 50, 25, 150);
            }
        """
        )
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.setBackground(self.COLOR_BACKGROUND)
        self.plot_widget.hideAxis("left")
        self.plot_widget.hideAxis("bottom")
        self.plot_widget.setMouseEnabled(x=False, y=False)
        self.plot_widget.setXRange(-self.max_range_mi, self.max_range_mi)
        self.plot_widget.setYRange(-self.max_range_mi, self.max_range_mi)

        layout.addWidget(self.plot_widget)

        self._draw_grid()

        self.gonio_line = pg.PlotCurveItem(pen=pg.mkPen(color=self.COLOR_GONIO, width=2))
        self.plot_widget.addItem(self.gonio_line)

        self.blip_scatter = pg.ScatterPlotItem(pen=pg.mkPen(None))
        self.plot_widget.addItem(self.blip_scatter)

    def _draw_grid(self) -> None:
        """Range rings, sector edges and station marker."""
        grid_pen = pg.mkPen(color=self.COLOR_GRID, width=1)
        theta = np.linspace(0, 2 * np.pi, 181)

        for ring in np.arange(20.0, self.max_range_mi + 1e-6, 20.0):
            ring_item = pg.PlotCurveItem(ring * np.sin(theta), ring * np.cos(theta), pen=grid_pen)
            self.plot_widget.addItem(ring_item)

            label = pg.TextItem(f"{ring:.0f}", color=self.COLOR_GRID, anchor=(0.5, 1.0))
            label.setPos(0, ring)
            self.plot_widget.addItem(label)

        sector_pen = pg.mkPen(color=self.COLOR_SECTOR, width=1, style=Qt.PenStyle.DashLine)
        for edge in self.sector:
            x, y = _to_xy(self.max_range_mi, edge)
            self.plot_widget.addItem(pg.PlotCurveItem([0, x], [0, y], pen=sector_pen))

        station = pg.ScatterPlotItem(
            [0], [0], size=8, symbol="s", pen=pg.mkPen(None), brush=pg.mkBrush(0, 255, 100)
        )
        self.plot_widget.addItem(station)

    def update_display(self, state: Dict[str, Any]):
        """
        Update display with new station state.

        Args:
            state: Snapshot dictionary from StationEngine
        """
        x, y = _to_xy(self.max_range_mi, state.get("goniometer_deg", 160.0))
        self.gonio_line.setData([0, x], [0, y])

        spots = []
        for contact in state.get("contacts", []):
            cx, cy = contact["position"]
            strength = contact.get("signal_strength", 0.0)
            color = self.COLOR_ESCORT if contact.get("is_escort") else self.COLOR_BOMBER
            alpha = int(90 + 165 * min(1.0, strength / 3.0))
            spots.append(
                {
                    "pos": (cx, cy),
                    "size": 6 + 1.5 * contact.get("formation_size", 1),
                    "brush": pg.mkBrush(*color, alpha),
                    "symbol": "t" if contact.get("is_escort") else "o",
                }
            )
        self.blip_scatter.setData(spots)
