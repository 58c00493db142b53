"""
Main Window

Application shell for the Chain Home operator console.

Components:
    - A-Scope (receiver trace, central)
    - Plan view (derived bearing/range map)
    - Station controls (right dock)
    - Contact table (left dock, shown by the analysis toggle)
    - Status bar

Architecture: the GUI only visualises engine snapshots; all simulation
state changes go through the StationController.
"""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSlot
from PyQt6.QtWidgets import (
    QDockWidget,
    QMainWindow,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chainhome.io.config_loader import StationConfig
from chainhome.simulation.engine import StationEngine

from .a_scope import AScope
from .panels import ContactTable, StationControls
from .ppi_scope import PPIScope
from .station_controller import StationController


class MainWindow(QMainWindow):
    """
    Main application window.

    Keyboard:
        P            Toggle power
        Left/Right   Nudge goniometer by 1°
        A            Toggle analysis view
    """

    def __init__(
        self, config: Optional[StationConfig] = None, seed: Optional[int] = None
    ) -> None:
        super().__init__()

        self.config = config or StationConfig()

        self.setWindowTitle(f"{self.config.name} - RDF Station")
        self.setMinimumSize(1100, 750)

        self._apply_dark_theme()

        self.engine = StationEngine(self.config, seed=seed)
        self.controller = StationController(self.engine, parent=self)

        self._setup_ui()
        self._setup_status_bar()

        self.controller.update_data.connect(self._on_update)
        self.controller.power_changed.connect(self._on_power_changed)
        self.controller.error.connect(self._on_error)

        self._on_update(self.engine.snapshot(include_trace=False))

    def _apply_dark_theme(self) -> None:
        """Apply dark military theme."""
        self.setStyleSheet(
            """
            QMainWindow {
                background-color: #0a1510;
            }
            QDockWidget {
                color: #00dd66;
                font-family: 'Consolas', monospace;
            }
            QDockWidget::title {
                background-color: #002815;
                padding: 4px;
            }
        """
        )

    def _setup_ui(self) -> None:
        """Setup the main layout."""
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(5, 5, 5, 5)

        sweep = self.config.sweep
        sector = self.config.sector.limits

        self.scope_splitter = QSplitter(Qt.Orientation.Horizontal)

        self.a_scope = AScope(
            max_range_mi=sweep.display_range_mi, max_deflection=sweep.max_deflection
        )
        self.scope_splitter.addWidget(self.a_scope)

        self.ppi_scope = PPIScope(max_range_mi=sweep.display_range_mi, sector=sector)
        self.scope_splitter.addWidget(self.ppi_scope)

        self.scope_splitter.setSizes([650, 450])
        main_layout.addWidget(self.scope_splitter)

        # Right dock for controls
        control_dock = QDockWidget("CONTROLS", self)
        control_dock.setObjectName("controls_dock")
        control_dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetMovable
            | QDockWidget.DockWidgetFeature.DockWidgetFloatable
        )

        self.controls = StationControls(
            sector=sector, initial_deg=self.engine.goniometer.angle_deg
        )
        self.controls.power_toggled.connect(self.controller.set_powered)
        self.controls.goniometer_changed.connect(self.controller.set_goniometer)
        self.controls.analysis_toggled.connect(self._on_analysis_toggled)

        control_dock.setWidget(self.controls)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, control_dock)

        # Left dock for the analysis view (hidden by default)
        self.analysis_dock = QDockWidget("ANALYSIS", self)
        self.analysis_dock.setObjectName("analysis_dock")
        self.analysis_dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetMovable
            | QDockWidget.DockWidgetFeature.DockWidgetFloatable
        )

        self.contact_table = ContactTable()
        self.analysis_dock.setWidget(self.contact_table)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.analysis_dock)
        self.analysis_dock.hide()

    def _setup_status_bar(self) -> None:
        """Setup status bar."""
        self.status_bar = QStatusBar()
        self.status_bar.setStyleSheet(
            """
            QStatusBar {
                background-color: #001a0d;
                color: #00aa55;
                font-family: 'Consolas', monospace;
                font-size: 11px;
            }
        """
        )
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Station unpowered | Press P or POWER to start")

    # ═══════════════════════════════════════════════════════════════════════
    # HANDLERS
    # ═══════════════════════════════════════════════════════════════════════

    @pyqtSlot(dict)
    def _on_update(self, state: dict) -> None:
        """Route a snapshot to every display."""
        self.a_scope.update_display(state)
        self.ppi_scope.update_display(state)
        if self.analysis_dock.isVisible():
            self.contact_table.update_display(state)

        if state.get("powered"):
            self.status_bar.showMessage(
                f"SIM TIME: {state.get('time', 0.0) / 60.0:5.1f} min | "
                f"CONTACTS: {len(state.get('contacts', []))} | "
                f"SWEEPS: {state.get('cycle_count', 0)} | "
                f"STATE: {state.get('state', '').upper()}"
            )

    @pyqtSlot(bool)
    def _on_power_changed(self, powered: bool) -> None:
        if not powered:
            self.status_bar.showMessage("Station unpowered")

    @pyqtSlot(bool)
    def _on_analysis_toggled(self, visible: bool) -> None:
        self.analysis_dock.setVisible(visible)
        if visible:
            self.contact_table.update_display(self.engine.snapshot(include_trace=False))

    @pyqtSlot(str)
    def _on_error(self, error_msg: str) -> None:
        """Handle simulation error."""
        self.status_bar.showMessage(f"ERROR: {error_msg}")

    def keyPressEvent(self, event) -> None:
        key = event.key()
        if key == Qt.Key.Key_P:
            self.controls.power_btn.toggle()
        elif key == Qt.Key.Key_Left:
            self.controls.nudge_goniometer(-1.0)
        elif key == Qt.Key.Key_Right:
            self.controls.nudge_goniometer(1.0)
        elif key == Qt.Key.Key_A:
            self.controls.analysis_check.toggle()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event) -> None:
        self.controller.stop()
        super().closeEvent(event)
