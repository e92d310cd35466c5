from __future__ import annotations

from datetime import date

import pytest

import models.data_store as data_store
from app import create_app
from models import Shift


@pytest.fixture
def app():
    return create_app({"TESTING": True, "PERSIST_SHIFTS": False})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return app.extensions["shiftmaster"]


@pytest.fixture
def make_shift():
    counter = {"n": 0}

    def _make(day=date(2024, 6, 10), worker="Alice Smith", area="Office",
              start="09:00", end="17:00", location="On-site", comments=None, shift_id=None):
        counter["n"] += 1
        return Shift(
            id=shift_id or f"s{counter['n']}",
            date=day,
            worker=worker,
            area=area,
            start_time=start,
            end_time=end,
            location=location,
            comments=comments,
        )

    return _make


@pytest.fixture
def local_storage(tmp_path, monkeypatch):
    """永続化先を一時ディレクトリに向け、Firestoreは使わない"""
    shifts_file = tmp_path / "data" / "shifts.json"
    monkeypatch.setattr(data_store, "DATA_DIR", shifts_file.parent)
    monkeypatch.setattr(data_store, "SHIFTS_FILE", shifts_file)
    monkeypatch.setattr(data_store, "FIRESTORE_AVAILABLE", False)
    return shifts_file
