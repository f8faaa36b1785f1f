"""
Run with: python -m wireframeprojector
"""
from __future__ import annotations

import logging
import sys

from wireframeprojector.app.application import create_app
from wireframeprojector.app.ui.main_window import MainWindow
from wireframeprojector.logging_config import setup_logging


def main() -> int:
    """Main entry point for the application."""
    # Use logging.DEBUG to see viewport and per-point failures
    setup_logging(level=logging.INFO)

    app = create_app()
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
