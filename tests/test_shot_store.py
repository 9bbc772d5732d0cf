"""
Shot loading from Supabase (stubbed client) and local JSON exports.

Usage:
    pytest tests/test_shot_store.py
"""
import json
import sys
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from shotchart.data import shot_store
from shotchart.data.shot_store import ShotDataError, fetch_shots, load_shots_json, records_from_rows

ROWS = [
    {"id": "1", "court_x_position": 95, "court_y_position": 490, "made": True,
     "shot_type": "3PT", "player_id": "p1", "session_id": "s1", "created_at": "2026-10-01T10:00:00Z"},
    {"id": "2", "court_x_position": 300, "court_y_position": 470, "made": False,
     "shot_type": "2PT", "player_id": "p1", "session_id": "s1", "created_at": "2026-10-02T10:00:00+00:00"},
]


class _Response:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, data, error=None):
        self.calls = []
        self._data = data
        self._error = error

    def table(self, name):
        self.calls.append(("table", name))
        return self

    def select(self, cols):
        self.calls.append(("select", cols))
        return self

    def gte(self, col, value):
        self.calls.append(("gte", col, value))
        return self

    def lte(self, col, value):
        self.calls.append(("lte", col, value))
        return self

    def eq(self, col, value):
        self.calls.append(("eq", col, value))
        return self

    def execute(self):
        if self._error:
            raise self._error
        return _Response(self._data)


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeQuery(ROWS)
    monkeypatch.setattr(shot_store, "_get_client", lambda: client)
    return client


def test_fetch_applies_filters(fake_client):
    shots = fetch_shots(player_id="p1", session_id="s1", start=date(2026, 10, 1), end=date(2026, 10, 31))
    assert [s.id for s in shots] == ["1", "2"]
    assert fake_client.calls == [
        ("table", "shots"),
        ("select", "*"),
        ("gte", "created_at", "2026-10-01T00:00:00Z"),
        ("lte", "created_at", "2026-10-31T23:59:59Z"),
        ("eq", "player_id", "p1"),
        ("eq", "session_id", "s1"),
    ]


def test_fetch_without_filters(fake_client):
    fetch_shots()
    assert fake_client.calls == [("table", "shots"), ("select", "*")]


def test_fetch_empty_result(monkeypatch):
    monkeypatch.setattr(shot_store, "_get_client", lambda: FakeQuery(None))
    assert fetch_shots() == []


def test_fetch_error_is_wrapped(monkeypatch):
    monkeypatch.setattr(shot_store, "_get_client", lambda: FakeQuery([], error=ConnectionError("boom")))
    with pytest.raises(ShotDataError, match="boom"):
        fetch_shots(player_id="p1")


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(shot_store, "_supabase", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(ShotDataError):
        fetch_shots()


def test_load_json_list(tmp_path):
    path = tmp_path / "shots.json"
    path.write_text(json.dumps(ROWS))
    shots = load_shots_json(path)
    assert [(s.court_x, s.court_y, s.made) for s in shots] == [(95.0, 490.0, True), (300.0, 470.0, False)]


def test_load_json_wrapped(tmp_path):
    path = tmp_path / "shots.json"
    path.write_text(json.dumps({"shots": ROWS}))
    assert len(load_shots_json(path)) == 2


@pytest.mark.parametrize("content", ["not json", '{"rows": []}', "42"])
def test_load_json_bad_content(tmp_path, content):
    path = tmp_path / "shots.json"
    path.write_text(content)
    with pytest.raises(ShotDataError):
        load_shots_json(path)


def test_load_json_missing_file(tmp_path):
    with pytest.raises(ShotDataError):
        load_shots_json(tmp_path / "nope.json")


def test_malformed_rows_are_skipped():
    rows = [ROWS[0], {"id": "bad", "court_x_position": "left"}, "not a row", ROWS[1]]
    assert [s.id for s in records_from_rows(rows)] == ["1", "2"]
