from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol, Sequence

import numpy as np

from .utils import one_hot, softmax


class Network(Protocol):
    """What the game loop needs from a trainable opponent model.

    forward:  encoded input -> one score per Choice (not necessarily normalized)
    backward: one training step towards `target` using the last forward pass
    """

    def forward(self, x: Sequence[float]) -> Sequence[float]:
        ...

    def backward(self, target: int, learning_rate: float) -> None:
        ...


# (input_width, hidden_width, output_width) -> Network
NetworkFactory = Callable[[int, int, int], Network]


class NumpyRPSNetwork:
    """
    Small sliding-window network used as the default opponent.

    - Keeps the last `history_size` inputs, concatenated oldest first
    - One tanh hidden layer, softmax output over the 3 moves
    - backward is a single cross-entropy gradient step on the cached window
    """

    def __init__(
        self,
        input_size: int,
        hidden_size: int,
        output_size: int = 3,
        history_size: int = 5,
        seed: Optional[int] = None,
    ):
        if min(input_size, hidden_size, output_size, history_size) <= 0:
            raise ValueError("network sizes must be positive")
        self.input_size = int(input_size)
        self.hidden_size = int(hidden_size)
        self.output_size = int(output_size)
        self.history_size = int(history_size)

        rng = np.random.default_rng(seed)
        window = self.input_size * self.history_size
        self.history = np.zeros(window, dtype=np.float32)
        self.w1 = (rng.random((window, self.hidden_size), dtype=np.float32) * 0.2 - 0.1)
        self.b1 = np.zeros(self.hidden_size, dtype=np.float32)
        self.hidden = np.zeros(self.hidden_size, dtype=np.float32)
        self.w2 = (rng.random((self.hidden_size, self.output_size), dtype=np.float32) * 0.2 - 0.1)
        self.b2 = np.zeros(self.output_size, dtype=np.float32)
        self._probs = np.full(self.output_size, 1.0 / self.output_size, dtype=np.float32)
        self.steps = 0  # forward passes seen

    def forward(self, x: Sequence[float]) -> np.ndarray:
        x = np.asarray(x, dtype=np.float32).reshape(-1)
        if x.shape[0] != self.input_size:
            raise ValueError(f"expected input of width {self.input_size}, got {x.shape[0]}")

        # Shift the window left by one input and append the new one
        self.history = np.concatenate([self.history[self.input_size:], x])

        self.hidden = np.tanh(self.history @ self.w1 + self.b1)
        logits = self.hidden @ self.w2 + self.b2
        self._probs = softmax(logits)
        self.steps += 1
        return self._probs.copy()

    def backward(self, target: int, learning_rate: float) -> None:
        if self.steps == 0:
            raise RuntimeError("backward called before any forward pass")
        target = int(target)
        if not 0 <= target < self.output_size:
            raise ValueError(f"target out of range: {target}")

        # d(cross-entropy)/d(logits) for a softmax output
        dprobs = self._probs - one_hot(target, self.output_size)
        dhidden = (self.w2 @ dprobs) * (1.0 - self.hidden * self.hidden)

        lr = np.float32(learning_rate)
        self.w2 -= lr * np.outer(self.hidden, dprobs)
        self.b2 -= lr * dprobs
        self.w1 -= lr * np.outer(self.history, dhidden)
        self.b1 -= lr * dhidden

    def probs(self) -> np.ndarray:
        return self._probs.copy()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_size": self.input_size,
            "hidden_size": self.hidden_size,
            "output_size": self.output_size,
            "history_size": self.history_size,
            "history": self.history.tolist(),
            "w1": self.w1.tolist(),
            "b1": self.b1.tolist(),
            "hidden": self.hidden.tolist(),
            "w2": self.w2.tolist(),
            "b2": self.b2.tolist(),
            "probs": self._probs.tolist(),
            "steps": self.steps,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "NumpyRPSNetwork":
        obj = NumpyRPSNetwork(
            input_size=int(d["input_size"]),
            hidden_size=int(d["hidden_size"]),
            output_size=int(d.get("output_size", 3)),
            history_size=int(d.get("history_size", 5)),
        )
        obj.history = np.array(d["history"], dtype=np.float32)
        obj.w1 = np.array(d["w1"], dtype=np.float32)
        obj.b1 = np.array(d["b1"], dtype=np.float32)
        obj.hidden = np.array(d["hidden"], dtype=np.float32)
        obj.w2 = np.array(d["w2"], dtype=np.float32)
        obj.b2 = np.array(d["b2"], dtype=np.float32)
        obj._probs = np.array(d["probs"], dtype=np.float32)
        obj.steps = int(d.get("steps", 0))
        return obj


def numpy_network_factory(history_size: int = 5, seed: Optional[int] = None) -> NetworkFactory:
    def build(input_width: int, hidden_width: int, output_width: int) -> NumpyRPSNetwork:
        return NumpyRPSNetwork(input_width, hidden_width, output_width, history_size=history_size, seed=seed)

    return build
