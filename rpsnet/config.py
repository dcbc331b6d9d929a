from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .encoding import Layout
from .policy import POLICIES
from .trainer import DEFAULT_LEARNING_RATE


@dataclass
class SessionConfig:
    layout: str = Layout.EXTENDED.value
    policy: str = "greedy"
    learning_rate: float = DEFAULT_LEARNING_RATE
    hidden_width: int = 40
    history_size: int = 5
    seed: Optional[int] = None

    def validate(self) -> "SessionConfig":
        try:
            self.layout = Layout(str(self.layout).lower()).value
        except ValueError:
            raise ValueError(f"unknown layout {self.layout!r}; expected one of {[x.value for x in Layout]}") from None
        self.policy = str(self.policy).lower()
        if self.policy not in POLICIES:
            raise ValueError(f"unknown policy {self.policy!r}; expected one of {POLICIES}")
        if not (math.isfinite(self.learning_rate) and self.learning_rate > 0):
            raise ValueError(f"learning_rate must be a positive finite number, got {self.learning_rate!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        if self.hidden_width <= 0 or self.history_size <= 0:
            raise ValueError("hidden_width and history_size must be positive")
        return self

    @property
    def input_width(self) -> int:
        return Layout(self.layout).width

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "SessionConfig":
        seed = d.get("seed")
        return SessionConfig(
            layout=d.get("layout", Layout.EXTENDED.value),
            policy=d.get("policy", "greedy"),
            learning_rate=float(d.get("learning_rate", DEFAULT_LEARNING_RATE)),
            hidden_width=int(d.get("hidden_width", 40)),
            history_size=int(d.get("history_size", 5)),
            seed=int(seed) if seed is not None else None,
        ).validate()

    @staticmethod
    def from_env(prefix: str = "RPSNET_") -> "SessionConfig":
        d: Dict[str, Any] = {}
        for key in ("layout", "policy", "learning_rate", "hidden_width", "history_size", "seed"):
            v = os.getenv(prefix + key.upper())
            if v is not None and v.strip():
                d[key] = v.strip()
        return SessionConfig.from_dict(d)
