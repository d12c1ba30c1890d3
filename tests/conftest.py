from __future__ import annotations

import pytest

import study_log
from study_log import SessionStore


class FakePersistence:
    """In-memory stand-in for the JSON file store."""

    def __init__(self, snapshot: object | None = None) -> None:
        self.snapshot = snapshot
        self.saved: list[dict] = []

    def load(self) -> object | None:
        return self.snapshot

    def save(self, snapshot: dict) -> None:
        self.saved.append(snapshot)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setattr(study_log, "_SUPPORTS_COLOR", False)


@pytest.fixture
def make_port():
    return FakePersistence


@pytest.fixture
def fake_port() -> FakePersistence:
    return FakePersistence()


@pytest.fixture
def store(fake_port) -> SessionStore:
    return SessionStore(fake_port)


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    path = tmp_path / "study" / "study_data.json"
    monkeypatch.setenv("STUDY_LOG_FILE", str(path))
    return path
