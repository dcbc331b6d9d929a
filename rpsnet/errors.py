from __future__ import annotations


class RPSNetError(Exception):
    """Base class for errors raised by rpsnet."""


class SessionError(RPSNetError):
    """A session was driven outside its lifecycle (e.g. constructed twice)."""


class NetworkNotReady(SessionError):
    def __init__(self, message: str = "network not ready") -> None:
        super().__init__(message)


class OpponentUnavailable(RPSNetError):
    def __init__(self, message: str = "opponent unavailable") -> None:
        super().__init__(message)


class MalformedNetworkOutput(RPSNetError, ValueError):
    """The network returned a probability vector the policy cannot use."""
