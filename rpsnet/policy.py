from __future__ import annotations

import random
from typing import Optional, Sequence

import numpy as np

from .choices import Choice
from .errors import MalformedNetworkOutput

GREEDY = "greedy"
SAMPLING = "sampling"
POLICIES = (GREEDY, SAMPLING)


def validate_probs(probs: Sequence[float]) -> np.ndarray:
    try:
        p = np.asarray(probs, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise MalformedNetworkOutput(f"malformed network output: {probs!r}") from e
    if p.shape[0] != len(Choice):
        raise MalformedNetworkOutput(
            f"malformed network output: expected {len(Choice)} entries, got {p.shape[0]}"
        )
    if not np.all(np.isfinite(p)):
        raise MalformedNetworkOutput(f"malformed network output: non-finite values {p.tolist()}")
    return p


class GreedyPolicy:
    """Arg-max with lowest-index tie-break.

    ROCK is the starting best; a later index only takes over on a strict
    improvement, so ties always resolve towards ROCK, then PAPER.
    [0.5, 0.5, 0.5] -> ROCK, [0.1, 0.7, 0.7] -> PAPER.
    """

    name = GREEDY

    def select(self, probs: Sequence[float]) -> Choice:
        p = validate_probs(probs)
        best = 0
        for i in range(1, len(p)):
            if p[i] > p[best]:
                best = i
        return Choice(best)


class SamplingPolicy:
    """Draw a choice in proportion to its share of the total mass.

    Unlike GreedyPolicy, a tie such as [0.5, 0.5, 0.5] yields each choice a
    third of the time. The vector does not need to sum to 1 but must be
    non-negative with some positive mass.
    """

    name = SAMPLING

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def select(self, probs: Sequence[float]) -> Choice:
        p = validate_probs(probs)
        if np.any(p < 0):
            raise MalformedNetworkOutput(f"malformed network output: negative values {p.tolist()}")
        total = float(np.sum(p))
        if total <= 0.0:
            raise MalformedNetworkOutput("malformed network output: zero probability mass")
        rnd = self.rng.random() * total
        for i, mass in enumerate(p):
            if rnd < mass:
                return Choice(i)
            rnd -= mass
        # float drift: fall back to the last choice carrying mass
        return Choice(int(np.flatnonzero(p > 0)[-1]))


def make_policy(name: str = GREEDY, seed: Optional[int] = None):
    name = (name or GREEDY).lower()
    if name == GREEDY:
        return GreedyPolicy()
    if name == SAMPLING:
        return SamplingPolicy(seed=seed)
    raise ValueError(f"unknown policy {name!r}; expected one of {POLICIES}")
