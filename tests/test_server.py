import pytest

fastapi = pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from rpsnet import SessionConfig
from server.main import create_app


@pytest.fixture()
def client(tmp_path) -> TestClient:
    app = create_app(SessionConfig(seed=5), state_dir=str(tmp_path))
    return TestClient(app)


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "healthy"}


def test_play_before_session_is_409(client):
    res = client.post("/play", json={"choice": "rock"})
    assert res.status_code == 409
    assert res.json()["detail"] == "network not ready"
    assert client.get("/history").json() == []
    assert client.get("/probs").json() == {"probs": None}
    assert client.get("/state").json()["state"] == "awaiting_network"


def test_session_then_play(client):
    res = client.post("/session")
    assert res.status_code == 200
    assert res.json()["state"] == "ready"

    probs = client.get("/probs").json()["probs"]
    assert len(probs) == 3

    res = client.post("/play", json={"choice": "rock"})
    assert res.status_code == 200
    body = res.json()
    assert body["player_choice"] == "rock"
    assert body["computer_choice"] in ("rock", "paper", "scissors")
    assert body["outcome"] in ("player", "computer", "draw")

    client.post("/play", json={"choice": 2})
    history = client.get("/history").json()
    assert [r["player_choice"] for r in history] == ["rock", "scissors"]
    assert client.get("/state").json()["rounds"] == 2


def test_bad_choice_is_422(client):
    client.post("/session")
    res = client.post("/play", json={"choice": "lizard"})
    assert res.status_code == 422
    assert client.get("/history").json() == []


def test_session_options(client):
    res = client.post("/session", json={"layout": "minimal", "policy": "sampling"})
    assert res.status_code == 200
    assert res.json()["config"]["layout"] == "minimal"
    assert res.json()["config"]["policy"] == "sampling"
    assert client.post("/session", json={"layout": "wide"}).status_code == 422


def test_new_session_resets_history(client):
    client.post("/session")
    client.post("/play", json={"choice": "paper"})
    client.post("/session")
    assert client.get("/history").json() == []


def test_save(client, tmp_path):
    client.post("/session")
    client.post("/play", json={"choice": "paper"})
    res = client.post("/save")
    assert res.status_code == 200
    sid = res.json()["id"]
    assert (tmp_path / f"session_{sid}.json").exists()


def test_bad_session_config_is_422_not_503(client):
    res = client.post("/session", json={"seed": -1})
    assert res.status_code == 422
    assert "seed" in res.json()["detail"]
    assert client.get("/state").json()["state"] == "awaiting_network"


def test_save_then_load_resumes_session(client):
    client.post("/session")
    for c in ("rock", "paper", "paper"):
        client.post("/play", json={"choice": c})
    sid = client.post("/save").json()["id"]
    probs = client.get("/probs").json()["probs"]
    assert client.get("/sessions").json() == {"sessions": [sid]}

    client.post("/session")
    assert client.get("/history").json() == []

    res = client.post(f"/session/{sid}/load")
    assert res.status_code == 200
    assert res.json()["id"] == sid
    assert res.json()["state"] == "ready"
    assert [r["player_choice"] for r in client.get("/history").json()] == ["rock", "paper", "paper"]
    assert client.get("/probs").json()["probs"] == pytest.approx(probs)
    assert client.post("/play", json={"choice": "scissors"}).status_code == 200
    assert client.get("/state").json()["rounds"] == 4


def test_load_unknown_session_is_404(client):
    assert client.post("/session/deadbeef/load").status_code == 404
    assert client.post("/session/a.b/load").status_code == 422


def test_load_snapshot_without_network_is_409(client):
    sid = client.post("/save").json()["id"]
    assert client.post(f"/session/{sid}/load").status_code == 409
