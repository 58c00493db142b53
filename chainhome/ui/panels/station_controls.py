"""
Station Controls Panel

Operator controls: power switch, goniometer knob and analysis-view toggle.

Architecture: Emits signals only; the main window routes them to the
StationController.
"""

from typing import Optional, Tuple

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QGroupBox,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)


class StationControls(QWidget):
    """
    Control panel for the receiver hut.

    Signals:
        power_toggled: New power state
        goniometer_changed: New goniometer angle [deg]
        analysis_toggled: Analysis view visibility
    """

    power_toggled = pyqtSignal(bool)
    goniometer_changed = pyqtSignal(float)
    analysis_toggled = pyqtSignal(bool)

    # Slider works in tenths of a degree
    _SLIDER_SCALE = 10

    def __init__(
        self,
        sector: Tuple[float, float] = (110.0, 210.0),
        initial_deg: float = 160.0,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.sector = sector
        self._setup_ui(initial_deg)

    def _setup_ui(self, initial_deg: float) -> None:
        """Setup control panel UI."""
        layout = QVBoxLayout(self)
        layout.setSpacing(15)

        header = QLabel("RECEIVER CONTROLS")
        header.setStyleSheet(
            """
            QLabel {
                color: #00ff88;
                font-family: 'Consolas', monospace;
                font-size: 14px;
                font-weight: bold;
                padding: 5px;
                background-color: rgba(0, 40, 20, 200);
                border: 1px solid #00aa55;
            }
        """
        )
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        # ═══ POWER ═══
        power_group = self._create_control_group("POWER")
        power_layout = QVBoxLayout(power_group)

        self.power_btn = QPushButton("POWER OFF")
        self.power_btn.setCheckable(True)
        self.power_btn.setStyleSheet(
            """
            QPushButton {
                background-color: rgb(40, 10, 10);
                color: #ff6644;
                border: 1px solid #aa3322;
                padding: 10px;
                font-family: 'Consolas', monospace;
                font-weight: bold;
            }
            QPushButton:checked {
                background-color: rgb(0, 60, 30);
                color: #00ff88;
                border: 1px solid #00aa55;
            }
        """
        )
        self.power_btn.toggled.connect(self._on_power_toggled)
        power_layout.addWidget(self.power_btn)

        layout.addWidget(power_group)

        # ═══ GONIOMETER ═══
        gonio_group = self._create_control_group("GONIOMETER")
        gonio_layout = QVBoxLayout(gonio_group)

        self.gonio_label = QLabel(f"{initial_deg:.1f}°")
        self.gonio_label.setStyleSheet("color: #00dd66; font-size: 16px; font-weight: bold;")
        self.gonio_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        gonio_layout.addWidget(self.gonio_label)

        lo, hi = self.sector
        self.gonio_slider = QSlider(Qt.Orientation.Horizontal)
        self.gonio_slider.setRange(int(lo * self._SLIDER_SCALE), int(hi * self._SLIDER_SCALE))
        self.gonio_slider.setValue(int(initial_deg * self._SLIDER_SCALE))
        self.gonio_slider.valueChanged.connect(self._on_gonio_changed)
        self._style_slider(self.gonio_slider)
        gonio_layout.addWidget(self.gonio_slider)

        range_label = QLabel(f"{lo:.0f}° .. {hi:.0f}°")
        range_label.setStyleSheet("color: #888888; font-size: 10px;")
        range_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        gonio_layout.addWidget(range_label)

        layout.addWidget(gonio_group)

        # ═══ ANALYSIS ═══
        self.analysis_check = QCheckBox("Show analysis view")
        self.analysis_check.setStyleSheet("color: #00dd66;")
        self.analysis_check.toggled.connect(self.analysis_toggled.emit)
        layout.addWidget(self.analysis_check)

        layout.addStretch()

    def _create_control_group(self, title: str) -> QGroupBox:
        group = QGroupBox(title)
        group.setStyleSheet(
            """
            QGroupBox {
                color: #00aa55;
                font-family: 'Consolas', monospace;
                font-size: 11px;
                border: 1px solid #004422;
                margin-top: 8px;
                padding-top: 8px;
            }
        """
        )
        return group

    def _style_slider(self, slider: QSlider) -> None:
        slider.setStyleSheet(
            """
            QSlider::groove:horizontal {
                height: 6px;
                background: #003318;
            }
            QSlider::handle:horizontal {
                background: #00dd66;
                width: 14px;
                margin: -5px 0;
            }
        """
        )

    def _on_power_toggled(self, checked: bool) -> None:
        self.power_btn.setText("POWER ON" if checked else "POWER OFF")
        self.power_toggled.emit(checked)

    def _on_gonio_changed(self, value: int) -> None:
        angle = value / self._SLIDER_SCALE
        self.gonio_label.setText(f"{angle:.1f}°")
        self.goniometer_changed.emit(angle)

    def nudge_goniometer(self, delta_deg: float) -> None:
        """Move the knob by delta_deg (keyboard control)."""
        self.gonio_slider.setValue(
            self.gonio_slider.value() + int(round(delta_deg * self._SLIDER_SCALE))
        )
