import numpy as np
import pytest

from rpsnet import Choice, Layout, MoveEncoder


@pytest.mark.parametrize("choice", list(Choice))
def test_minimal_layout_is_one_hot(choice):
    enc = MoveEncoder(Layout.MINIMAL)
    v = enc.encode(choice)
    assert v.shape == (3,)
    expected = np.zeros(3, dtype=np.float32)
    expected[int(choice)] = 1.0
    assert np.array_equal(v, expected)


def test_minimal_layout_ignores_computer_choice():
    enc = MoveEncoder("minimal")
    assert np.array_equal(enc.encode(Choice.PAPER, Choice.SCISSORS), enc.encode(Choice.PAPER))


def test_extended_layout_uses_two_blocks():
    enc = MoveEncoder(Layout.EXTENDED)
    assert enc.width == 6
    for p in Choice:
        for c in Choice:
            v = enc.encode(p, c)
            assert v.shape == (6,)
            assert v[int(p)] == 1.0
            assert v[3 + int(c)] == 1.0
            assert v.sum() == 2.0


def test_extended_layout_without_previous_computer_move():
    v = MoveEncoder(Layout.EXTENDED).encode(Choice.SCISSORS, None)
    assert v.tolist() == [0, 0, 1, 0, 0, 0]


def test_blank_has_session_width():
    assert MoveEncoder("minimal").blank().tolist() == [0, 0, 0]
    assert MoveEncoder("extended").blank().shape == (6,)


def test_unknown_layout():
    with pytest.raises(ValueError):
        MoveEncoder("wide")
