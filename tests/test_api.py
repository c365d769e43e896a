import pytest
from fastapi.testclient import TestClient

from taro_ritual.config import Settings
from taro_ritual.main import create_app


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(db_path=str(tmp_path / "sessions.db"), draw_seed="fixed"))
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_spreads_hide_celtic_unless_asked(client):
    ids = [s["id"] for s in client.get("/spreads").json()["spreads"]]
    assert "celtic-10" not in ids
    all_ids = [s["id"] for s in client.get("/spreads", params={"all": "true"}).json()["spreads"]]
    assert "celtic-10" in all_ids


def test_select_spread_drives_next_reading(client):
    r = client.put("/spreads/selected", json={"spread_id": "five-heart"})
    assert r.status_code == 200
    assert r.json()["selected"] == "five-heart"
    assert client.get("/spreads").json()["selected"] == "five-heart"

    reading = client.post("/reading/start", json={}).json()["reading"]
    assert reading["spreadId"] == "five-heart"
    assert len(reading["cards"]) == 5

    assert client.put("/spreads/selected", json={"spread_id": "nope"}).status_code == 404
    assert client.get("/spreads").json()["selected"] == "five-heart"


def test_startup_rejects_broken_deck(tmp_path, monkeypatch):
    from taro_ritual import deck

    monkeypatch.setattr(deck, "_DECK", deck.list_deck()[:-1])
    app = create_app(Settings(db_path=str(tmp_path / "sessions.db")))
    with pytest.raises(deck.DeckError, match="exactly 78"):
        with TestClient(app):
            pass


def test_deck(client):
    j = client.get("/deck").json()
    assert j["card_count"] == 78
    assert len(j["cards"]) == 78
    assert client.get("/deck/major-00").json()["card"]["name"] == "The Fool"
    assert client.get("/deck/nope").status_code == 404


def test_reading_flow(client):
    r = client.post("/reading/start", json={"spread_id": "daily-3"})
    assert r.status_code == 200
    view = r.json()
    reading = view["reading"]
    assert reading["spreadId"] == "daily-3"
    assert len(reading["cards"]) == 3
    assert all("meaning" not in c for c in view["cards"])

    r = client.post("/reading/reveal", json={"index": 1})
    view = r.json()
    assert view["reading"]["activeIndex"] == 1
    assert view["cards"][1]["isRevealed"] is True
    assert "meaning" in view["cards"][1]

    r = client.post("/reading/active", json={"index": -5})
    assert r.json()["reading"]["activeIndex"] == 0

    r = client.post("/reading/reveal-all")
    assert all(c["isRevealed"] for c in r.json()["reading"]["cards"])

    current = client.get("/reading/current").json()
    assert current["reading"]["id"] == reading["id"]


def test_sessions_listing_and_resume(client):
    first = client.post("/reading/start", json={"spread_id": "daily-3"}).json()["reading"]
    client.post("/reading/start", json={"spread_id": "five-heart"})

    sessions = client.get("/sessions").json()["sessions"]
    assert [s["spreadId"] for s in sessions] == ["five-heart", "daily-3"]
    assert len(client.get("/sessions", params={"count": 5}).json()["sessions"]) == 1

    resumed = client.post(f"/sessions/{first['id']}/load").json()
    assert resumed["reading"]["id"] == first["id"]
    assert client.post("/sessions/missing/load").status_code == 404

    assert client.delete("/sessions").json() == {"ok": True, "remaining": 0}
    assert client.get("/sessions").json()["sessions"] == []


def test_history_survives_restart(tmp_path):
    settings = Settings(db_path=str(tmp_path / "sessions.db"))
    with TestClient(create_app(settings)) as c:
        c.post("/reading/start", json={"spread_id": "nine-grid"})
        c.put("/profile", json={"birth_date": "19/01/1990"})

    with TestClient(create_app(settings)) as c:
        sessions = c.get("/sessions").json()["sessions"]
        assert [s["spreadId"] for s in sessions] == ["nine-grid"]
        profile = c.get("/profile").json()
        assert profile["birthDate"] == "1990-01-19"
        assert profile["zodiac"]["id"] == "capricorn"


def test_profile_validation(client):
    r = client.put("/profile", json={"birth_date": "2020-02-29"})
    assert r.status_code == 200
    assert r.json()["zodiac"]["id"] == "pisces"

    r = client.put("/profile", json={"birth_date": "29.02.2021"})
    assert r.status_code == 400
    assert client.get("/profile").json()["birthDate"] == "2020-02-29"


def test_recommendation_shape(client):
    j = client.get("/recommendation").json()
    assert j["recommendedId"] in {"daily-3", "nine-grid", "five-heart"}
    assert j["message"]
