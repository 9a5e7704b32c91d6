import os

import pytest


@pytest.fixture(scope="session")
def qapp():
    """Shared QApplication on the offscreen platform"""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
