"""
Test the matchup API routes with an in-memory session.
"""

import sys
import os
import random
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from store import get_session
from matchup.routes import router
from matchup.logic import MatchupSession, Catalog, School


def _client(session: MatchupSession) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_session] = lambda: session
    return TestClient(app)


@pytest.fixture
def client():
    catalog = Catalog(
        schools=[
            School(id="A", color="#111", icon="a", advantageous_matches=["B"], disadvantageous_matches=["C"]),
            School(id="B", disadvantageous_matches=["A"]),
            School(id="C", advantageous_matches=["A"]),
        ]
    )
    return _client(MatchupSession(catalog, rng=random.Random(3)))


def test_health(client):
    response = client.get("/matchup/health")
    assert response.status_code == 200
    assert response.json()["catalog_loaded"] is True


def test_catalog_lists_active_flags(client):
    body = client.get("/matchup/catalog").json()

    assert [s["id"] for s in body["schools"]] == ["A", "B", "C"]
    assert all(s["active"] for s in body["schools"])
    assert body["schools"][0]["color"] == "#111"
    assert body["all_active"] is True
    assert body["controls_enabled"] is True


def test_recommendations(client):
    body = client.get("/matchup/recommendations").json()

    assert [(r["id"], r["score"]) for r in body["recommendations"]] == [("C", 1), ("A", 0), ("B", -1)]
    assert body["summary"]["best_school"] == "C"
    assert body["summary"]["best_score_tone"] == "positive"
    assert body["variant"] == "matchup"


def test_toggle_school(client):
    body = client.post("/matchup/selection/toggle/C").json()

    assert body["summary"]["selected_count"] == 2
    a = next(r for r in body["recommendations"] if r["id"] == "A")
    assert a["score"] == 1


def test_toggle_unknown_school_is_404(client):
    response = client.post("/matchup/selection/toggle/Nope")
    assert response.status_code == 404


def test_set_all_and_toggle_all(client):
    body = client.post("/matchup/selection/all", json={"active": False}).json()
    assert body["summary"]["empty_selection"] is True
    assert body["warnings"]

    body = client.post("/matchup/selection/toggle-all").json()
    assert body["summary"]["selected_count"] == 3


def test_random_selection(client):
    body = client.post("/matchup/selection/random", json={"min": 1, "max": 2}).json()
    assert 1 <= body["summary"]["selected_count"] <= 2

    body = client.post("/matchup/selection/random").json()
    assert body["summary"]["selected_count"] == 3


def test_random_selection_bad_bounds_is_400(client):
    response = client.post("/matchup/selection/random", json={"min": 3, "max": 1})
    assert response.status_code == 400


def test_reset(client):
    client.post("/matchup/selection/all", json={"active": False})
    body = client.post("/matchup/selection/reset").json()
    assert body["summary"]["selected_count"] == 3


def test_failed_load_disables_controls(tmp_path):
    client = _client(MatchupSession.open(str(tmp_path / "missing.json")))

    assert client.get("/matchup/health").json()["status"] == "degraded"
    for method, path in [
        ("get", "/matchup/catalog"),
        ("get", "/matchup/recommendations"),
        ("post", "/matchup/selection/toggle-all"),
        ("post", "/matchup/selection/reset"),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 503
        assert response.json()["controls_enabled"] is False


def test_random_selection_bad_bounds_detail(client):
    response = client.post("/matchup/selection/random", json={"min": 3, "max": 1})
    assert response.json()["detail"] == "Invalid random selection bounds: 3..1"


def test_unrelated_value_error_is_not_a_bad_request():
    class BrokenSession(MatchupSession):
        def toggle_all(self):
            raise ValueError("engine bug")

    catalog = Catalog(schools=[School(id="A")])
    client = _client(BrokenSession(catalog))

    with pytest.raises(ValueError, match="engine bug"):
        client.post("/matchup/selection/toggle-all")
