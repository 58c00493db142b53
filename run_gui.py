#!/usr/bin/env python3
"""
Chain Home Station - Operator Console

Launch the PyQt6 receiver hut console.

Usage:
    python run_gui.py
    python run_gui.py --config scenarios/default_station.yaml --seed 7

Features:
    - A-scope receiver trace with grass noise and phosphor persistence
    - Plan view of contacts inside the scan sector
    - Goniometer knob and power switch
    - Analysis table of live contacts
    - Station loading (YAML)

Keyboard:
    P            Toggle power
    Left/Right   Nudge goniometer
    A            Toggle analysis view
"""

import argparse
import logging
import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def main():
    """Launch the Chain Home console."""
    parser = argparse.ArgumentParser(description="Chain Home RDF station console")
    parser.add_argument("--config", type=str, default=None, help="YAML station configuration")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--verbose", action="store_true", help="Log contact spawns and retirements"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("Chain Home - RDF Station Console")
    print("=" * 60)
    print()

    # Check dependencies
    try:
        from PyQt6.QtWidgets import QApplication

        print("✓ PyQt6 OK")
    except ImportError:
        print("✗ PyQt6 not installed. Run: pip install PyQt6")
        return 1

    try:
        import pyqtgraph  # noqa: F401

        print("✓ PyQtGraph OK")
    except ImportError:
        print("✗ PyQtGraph not installed. Run: pip install pyqtgraph")
        return 1

    try:
        import yaml  # noqa: F401

        print("✓ PyYAML OK")
    except ImportError:
        print("✗ PyYAML not installed. Run: pip install pyyaml")
        return 1

    try:
        from chainhome.physics import validate_lobe_gain

        if not validate_lobe_gain()["validation"]["is_valid"]:
            print("✗ Signal model failed self-check")
            return 1
        print("✓ Signal model OK")
    except ImportError as e:
        print(f"✗ Signal model error: {e}")
        return 1

    config = None
    if args.config:
        from chainhome.io import load_station_config

        try:
            config = load_station_config(args.config)
        except (FileNotFoundError, ValueError) as e:
            print(f"✗ Station config error: {e}")
            return 1
        print(f"✓ Loaded {args.config}")

    print()
    print("Starting console...")
    print("=" * 60)

    from chainhome.ui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    # Apply dark theme palette
    from PyQt6.QtGui import QColor, QPalette

    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(10, 25, 15))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(0, 200, 100))
    palette.setColor(QPalette.ColorRole.Base, QColor(5, 20, 10))
    palette.setColor(QPalette.ColorRole.Text, QColor(0, 200, 100))
    palette.setColor(QPalette.ColorRole.Button, QColor(10, 30, 20))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(0, 200, 100))
    app.setPalette(palette)

    window = MainWindow(config=config, seed=args.seed)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
