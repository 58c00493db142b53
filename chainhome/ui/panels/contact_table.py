"""
Contact Table Panel

Analysis view: tabular list of live contacts with their derived range,
bearing, speed, altitude, formation size and current return strength.
"""

from typing import Any, Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)


class ContactTable(QWidget):
    """Read-only table of contacts from the engine snapshot."""

    COLUMNS = ["ID", "TYPE", "RANGE mi", "BRG °", "SPEED mph", "ALT ft", "N", "SIGNAL"]

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        header = QLabel("ANALYSIS: CONTACTS")
        header.setStyleSheet(
            "color: #00ff88; font-family: 'Consolas', monospace; font-weight: bold;"
        )
        layout.addWidget(header)

        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels(self.COLUMNS)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setStyleSheet(
            """
            QTableWidget {
                background-color: rgb(5, 20, 10);
                color: #00dd66;
                gridline-color: #004422;
                font-family: 'Consolas', monospace;
                font-size: 11px;
            }
            QHeaderView::section {
                background-color: #002815;
                color: #00aa55;
            }
        """
        )
        layout.addWidget(self.table)

    def update_display(self, state: Dict[str, Any]) -> None:
        contacts: List[Dict[str, Any]] = state.get("contacts", [])
        self.table.setRowCount(len(contacts))

        for row, c in enumerate(sorted(contacts, key=lambda c: c["range_mi"])):
            values = [
                str(c["id"]),
                c["aircraft"],
                f"{c['range_mi']:.1f}",
                f"{c['bearing_deg']:.1f}",
                f"{c['speed_mph']:.0f}",
                f"{c['altitude_ft']:.0f}",
                str(c["formation_size"]),
                f"{c.get('signal_strength', 0.0):.2f}",
            ]
            for col, text in enumerate(values):
                item = QTableWidgetItem(text)
                item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                self.table.setItem(row, col, item)
