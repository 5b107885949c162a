"""
Test catalog loading from files and URLs.
"""

import sys
import os
import json
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest
import requests

from matchup.logic import load_catalog, LoadError, ScoringVariant
from matchup.logic import catalog_loader
from matchup.logic.constants import DEFAULT_COLOR, DEFAULT_ICON

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "data")


def _write(tmp_path, name, payload) -> str:
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


def test_load_matchup_file_with_defaults(tmp_path):
    source = _write(tmp_path, "schools.json", [
        {"id": "Aggro", "color": "#c00", "icon": "A", "AdvantageousMatchingGenres": ["Control"]},
        {"id": "Control", "DisadvantageousEncounteredGenres": ["Aggro"]},
    ])
    catalog = load_catalog(source)

    assert catalog.ids == ["Aggro", "Control"]
    assert catalog.variant == ScoringVariant.MATCHUP
    control = catalog.get("Control")
    assert control.color == DEFAULT_COLOR
    assert control.icon == DEFAULT_ICON
    assert control.disadvantageous_matches == ["Aggro"]


def test_score_table_detected(tmp_path):
    source = _write(tmp_path, "schools.json", [
        {"id": "A", "score": {"B": 2, "C": -1}},
        {"id": "B"},
    ])
    catalog = load_catalog(source)
    assert catalog.variant == ScoringVariant.SCORE_TABLE
    assert catalog.get("A").score == {"B": 2, "C": -1}


def test_variant_override(tmp_path):
    source = _write(tmp_path, "schools.json", [{"id": "A", "score": {"B": 2}}])
    catalog = load_catalog(source, variant=ScoringVariant.MATCHUP)
    assert catalog.variant == ScoringVariant.MATCHUP


def test_malformed_and_duplicate_records_skipped(tmp_path):
    source = _write(tmp_path, "schools.json", [
        {"id": "A"},
        "not a record",
        {"color": "#fff"},
        {"id": "A", "color": "#000"},
        {"id": "B", "score": {"A": "high", "C": 1}},
    ])
    catalog = load_catalog(source)

    assert catalog.ids == ["A", "B"]
    assert catalog.get("A").color == DEFAULT_COLOR
    assert catalog.get("B").score == {"C": 1}


def test_combinations_loaded_in_order(tmp_path):
    source = _write(tmp_path, "schools.json", [{"id": "A"}, {"id": "B"}])
    combos = _write(tmp_path, "genre.json", [
        {"mainGenre": "A", "subGenre": "B"},
        {"mainGenre": "A"},
        {"mainGenre": "B", "subGenre": "A"},
    ])
    catalog = load_catalog(source, combinations_source=combos)

    assert [(c.main_genre, c.sub_genre) for c in catalog.combinations] == [("A", "B"), ("B", "A")]
    assert [c.sub_genre for c in catalog.combinations_for("A")] == ["B"]


@pytest.mark.parametrize("payload", ["[]", "{}", "{\"id\": \"A\"}", "not json", "[1, 2, 3]"])
def test_bad_payload_raises_load_error(tmp_path, payload):
    source = _write(tmp_path, "schools.json", payload)
    with pytest.raises(LoadError):
        load_catalog(source)


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(LoadError) as exc_info:
        load_catalog(str(tmp_path / "missing.json"))
    assert exc_info.value.source.endswith("missing.json")


def test_bad_combinations_file_raises_load_error(tmp_path):
    source = _write(tmp_path, "schools.json", [{"id": "A"}])
    combos = _write(tmp_path, "genre.json", {"mainGenre": "A"})
    with pytest.raises(LoadError):
        load_catalog(source, combinations_source=combos)


def test_load_from_url(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(payload=[{"id": "Remote"}])

    monkeypatch.setattr(catalog_loader.requests, "get", fake_get)
    catalog = load_catalog("https://example.com/schools.json", timeout=3)

    assert catalog.ids == ["Remote"]
    assert calls == [("https://example.com/schools.json", 3)]


def test_url_error_status_raises_load_error(monkeypatch):
    monkeypatch.setattr(catalog_loader.requests, "get", lambda url, timeout: _FakeResponse(status_code=404))
    with pytest.raises(LoadError):
        load_catalog("https://example.com/schools.json")


def test_url_unreachable_raises_load_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(catalog_loader.requests, "get", fake_get)
    with pytest.raises(LoadError):
        load_catalog("http://localhost:1/schools.json")


def test_url_invalid_json_raises_load_error(monkeypatch):
    monkeypatch.setattr(catalog_loader.requests, "get", lambda url, timeout: _FakeResponse(text="<html>"))
    with pytest.raises(LoadError):
        load_catalog("https://example.com/schools.json")


def test_dangling_references_counted():
    schools = catalog_loader.parse_schools([
        {"id": "A", "AdvantageousMatchingGenres": ["B", "Ghost"], "score": {"Phantom": 1}},
        {"id": "B"},
    ])
    combos = catalog_loader.parse_combinations([{"mainGenre": "Ghost", "subGenre": "A"}])
    assert catalog_loader.count_dangling_references(schools, combos) == 3


def test_bundled_sample_data_loads():
    catalog = load_catalog(
        os.path.join(DATA_DIR, "schools.json"),
        combinations_source=os.path.join(DATA_DIR, "genre.json"),
    )
    assert catalog.size == 8
    assert catalog.variant == ScoringVariant.MATCHUP

    table = load_catalog(os.path.join(DATA_DIR, "score_schools.json"))
    assert table.variant == ScoringVariant.SCORE_TABLE
