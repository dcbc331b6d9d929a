from .choices import Choice, Outcome, Round, Scoreboard, outcome, wins_over
from .config import SessionConfig
from .core import GameSession, SessionState
from .encoding import Layout, MoveEncoder
from .errors import (
    MalformedNetworkOutput,
    NetworkNotReady,
    OpponentUnavailable,
    RPSNetError,
    SessionError,
)
from .network import Network, NumpyRPSNetwork
from .policy import GreedyPolicy, SamplingPolicy, make_policy
from .trainer import RoundTrainer

__all__ = [
    "Choice",
    "Outcome",
    "Round",
    "Scoreboard",
    "outcome",
    "wins_over",
    "SessionConfig",
    "GameSession",
    "SessionState",
    "Layout",
    "MoveEncoder",
    "MalformedNetworkOutput",
    "NetworkNotReady",
    "OpponentUnavailable",
    "RPSNetError",
    "SessionError",
    "Network",
    "NumpyRPSNetwork",
    "GreedyPolicy",
    "SamplingPolicy",
    "make_policy",
    "RoundTrainer",
]
