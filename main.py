#!/usr/bin/env python3
"""
Scientific Calculator - a button-driven calculator with trigonometric,
logarithmic and power functions, a running history and a dark Qt theme.
"""

import sys
from PyQt6.QtWidgets import QApplication

from calculator_window import ScientificCalculator

if sys.platform == "win32":
    import ctypes

    # Own taskbar group instead of python.exe's
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(
        "scicalc.scicalc"
    )


def apply_theme():
    """Apply the dark theme when qdarktheme is available for this Python"""
    try:
        import qdarktheme
    except ImportError:
        print("qdarktheme not installed, using the default Qt style")
        return
    qdarktheme.setup_theme()


def main():
    app = QApplication(sys.argv)
    apply_theme()

    calculator = ScientificCalculator()
    calculator.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
