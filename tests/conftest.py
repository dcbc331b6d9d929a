from typing import List, Optional, Sequence

import pytest

from rpsnet import GameSession, SessionConfig


class StubNetwork:
    """Records every call; forward returns a fixed vector unless told otherwise."""

    def __init__(self, input_width: int, hidden_width: int, output_width: int, output: Sequence[float] = (0.2, 0.5, 0.3)):
        self.input_width = input_width
        self.hidden_width = hidden_width
        self.output_width = output_width
        self.output = list(output)
        self.calls: List[tuple] = []
        self.fail_forward: Optional[Exception] = None
        self.fail_backward: Optional[Exception] = None

    def forward(self, x):
        assert len(x) == self.input_width
        self.calls.append(("forward", [float(v) for v in x]))
        if self.fail_forward is not None:
            raise self.fail_forward
        return list(self.output)

    def backward(self, target, learning_rate):
        self.calls.append(("backward", int(target), float(learning_rate)))
        if self.fail_backward is not None:
            raise self.fail_backward


def stub_factory(output=(0.2, 0.5, 0.3)):
    built = []

    def build(input_width, hidden_width, output_width):
        net = StubNetwork(input_width, hidden_width, output_width, output)
        built.append(net)
        return net

    build.built = built
    return build


@pytest.fixture()
def stub_session():
    factory = stub_factory()
    session = GameSession(SessionConfig(layout="extended")).construct(factory)
    return session, factory.built[0]


@pytest.fixture()
def numpy_session():
    return GameSession(SessionConfig(seed=7)).construct()
