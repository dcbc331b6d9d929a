from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .choices import Choice, Round, Scoreboard
from .config import SessionConfig
from .encoding import MoveEncoder
from .errors import NetworkNotReady, OpponentUnavailable, SessionError
from .network import Network, NetworkFactory, NumpyRPSNetwork, numpy_network_factory
from .policy import make_policy
from .trainer import RoundTrainer

logger = logging.getLogger(__name__)

OUTPUT_WIDTH = 3


class SessionState(str, Enum):
    AWAITING_NETWORK = "awaiting_network"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class GameSession:
    """
    One game against the learning opponent.

    - Owns exactly one network, built by `construct()`; no play before that
    - `play()` trains on the player's move, then runs the forward pass that
      picks the computer's move, then records the round
    - History is append-only; a failing network call appends nothing and
      leaves the session UNAVAILABLE
    """

    def __init__(self, config: Optional[SessionConfig] = None):
        self.config = (config or SessionConfig()).validate()
        self.encoder = MoveEncoder(self.config.layout)
        self.policy = make_policy(self.config.policy, seed=self.config.seed)
        self.network: Optional[Network] = None
        self.trainer: Optional[RoundTrainer] = None
        self.state = SessionState.AWAITING_NETWORK
        self._history: List[Round] = []
        self._probs: Optional[np.ndarray] = None
        self._lock = threading.RLock()

    # ---------------------- Lifecycle ----------------------
    def construct(self, factory: Optional[NetworkFactory] = None) -> "GameSession":
        with self._lock:
            if self.network is not None or self.state is not SessionState.AWAITING_NETWORK:
                raise SessionError("network already constructed for this session")
            if factory is None:
                factory = numpy_network_factory(self.config.history_size, self.config.seed)
            try:
                network = factory(self.encoder.width, self.config.hidden_width, OUTPUT_WIDTH)
                # Prime with an empty round so the first backward has a forward pass to train on
                probs = np.asarray(network.forward(self.encoder.blank()), dtype=np.float32)
            except Exception as e:
                self.state = SessionState.UNAVAILABLE
                logger.exception("network construction failed")
                raise OpponentUnavailable() from e
            self.network = network
            self.trainer = RoundTrainer(network, self.config.learning_rate)
            self._probs = probs
            self.state = SessionState.READY
            logger.info(
                "network ready: layout=%s input=%d hidden=%d policy=%s lr=%.3f",
                self.config.layout,
                self.encoder.width,
                self.config.hidden_width,
                self.config.policy,
                self.config.learning_rate,
            )
            return self

    @property
    def ready(self) -> bool:
        return self.state is SessionState.READY

    # ---------------------- Public API ----------------------
    def play(self, player_choice: Union[Choice, int, str]) -> Round:
        player_choice = Choice.parse(player_choice)
        with self._lock:
            if self.state is SessionState.AWAITING_NETWORK:
                raise NetworkNotReady()
            if self.state is SessionState.UNAVAILABLE:
                raise OpponentUnavailable()
            network, trainer = self.network, self.trainer
            if network is None or trainer is None:
                raise SessionError("session is ready but has no network")

            prev_computer = self._history[-1].computer_choice if self._history else None
            try:
                trainer.train(player_choice)
                x = self.encoder.encode(player_choice, prev_computer)
                probs = network.forward(x)
                computer_choice = self.policy.select(probs)
            except Exception as e:
                self.state = SessionState.UNAVAILABLE
                logger.exception("opponent failed on round %d", len(self._history) + 1)
                raise OpponentUnavailable() from e

            rnd = Round(player_choice=player_choice, computer_choice=computer_choice)
            self._history.append(rnd)
            self._probs = np.asarray(probs, dtype=np.float32)
            logger.debug(
                "round %d: player=%s computer=%s outcome=%s",
                len(self._history),
                player_choice.name,
                computer_choice.name,
                rnd.outcome.value,
            )
            return rnd

    def probs(self) -> Optional[List[float]]:
        if self._probs is None:
            return None
        return [float(p) for p in self._probs]

    @property
    def history(self) -> Tuple[Round, ...]:
        return tuple(self._history)

    def scoreboard(self) -> Scoreboard:
        return Scoreboard.from_rounds(self._history)

    def status(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "config": self.config.to_dict(),
            "score": self.scoreboard().to_dict(),
        }

    # ---------------------- Persistence ----------------------
    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            to_dict = getattr(self.network, "to_dict", None)
            return {
                "config": self.config.to_dict(),
                "state": self.state.value,
                "history": [r.to_dict() for r in self._history],
                "probs": self.probs(),
                "network": to_dict() if callable(to_dict) else None,
            }

    @staticmethod
    def restore(
        snapshot: Dict[str, Any],
        network_loader: Optional[Callable[[Dict[str, Any]], Network]] = None,
    ) -> "GameSession":
        """Rebuild a session from `snapshot()` output.

        Needs the saved network state; `network_loader` defaults to the
        reference numpy network. A snapshot taken while the opponent was
        unavailable comes back UNAVAILABLE. A sampling policy restarts its
        random stream from the configured seed, so a restored sampling game
        does not replay the draws the original would have made.
        """
        net_state = snapshot.get("network")
        if net_state is None:
            raise SessionError("snapshot carries no network state")
        session = GameSession(SessionConfig.from_dict(snapshot.get("config", {})))
        loader = network_loader or NumpyRPSNetwork.from_dict
        session.network = loader(net_state)
        session.trainer = RoundTrainer(session.network, session.config.learning_rate)
        session._history = [Round.from_dict(d) for d in snapshot.get("history", [])]
        probs = snapshot.get("probs")
        session._probs = np.asarray(probs, dtype=np.float32) if probs is not None else None
        saved_state = SessionState(snapshot.get("state", SessionState.READY.value))
        if saved_state is SessionState.AWAITING_NETWORK:
            raise SessionError("snapshot was taken before the network was constructed")
        session.state = saved_state
        return session
