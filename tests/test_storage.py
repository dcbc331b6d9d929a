import numpy as np
import pytest

from rpsnet import Choice, GameSession, SessionConfig
from rpsnet.storage import StateStorage


def test_save_load_session(tmp_path):
    storage = StateStorage(str(tmp_path / "state"))
    session = GameSession(SessionConfig(seed=1)).construct()
    for c in (Choice.ROCK, Choice.ROCK, Choice.PAPER):
        session.play(c)

    storage.save_session("abc123", session.snapshot())
    assert storage.list_sessions() == ["abc123"]

    snap = storage.load_session("abc123")
    restored = GameSession.restore(snap)
    assert restored.history == session.history
    assert np.allclose(restored.probs(), session.probs())
    assert restored.play(Choice.SCISSORS) == session.play(Choice.SCISSORS)


def test_missing_session(tmp_path):
    storage = StateStorage(str(tmp_path))
    assert storage.load_session("nope") is None
    assert storage.list_sessions() == []


def test_unsafe_session_ids_are_rejected(tmp_path):
    storage = StateStorage(str(tmp_path))
    for sid in ("../../etc/passwd", "a.b", "", "ab\n", "x" * 65):
        with pytest.raises(ValueError):
            storage.save_session(sid, {"history": []})
        with pytest.raises(ValueError):
            storage.load_session(sid)
    assert storage.list_sessions() == []


def test_distinct_ids_do_not_collide(tmp_path):
    storage = StateStorage(str(tmp_path))
    storage.save_session("ab", {"history": [], "tag": 1})
    storage.save_session("a-b", {"history": [], "tag": 2})
    assert storage.list_sessions() == ["a-b", "ab"]
    assert storage.load_session("ab")["tag"] == 1
    assert storage.load_session("a-b")["tag"] == 2
