# tests/conftest.py

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clean_theme(qapp):
    yield qapp
    qapp.setStyleSheet("")
    qapp.setProperty("darkTheme", False)
