"""Shared pytest fixtures for Calm tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from calm.database.db import configure_engine, init_db
from calm.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path, monkeypatch):
    """Keep settings and the sound cache out of the real home directory."""
    monkeypatch.setattr("calm.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("calm.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("calm.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh 10 s TimerEngine driven by a fake wall clock."""
    return TimerEngine(10_000, clock=clock)
