from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, Union

# Move encoding: 0=Rock, 1=Paper, 2=Scissors
_ALIASES = {
    "r": 0,
    "rock": 0,
    "p": 1,
    "paper": 1,
    "s": 2,
    "scissors": 2,
}


class Choice(IntEnum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    @classmethod
    def parse(cls, value: Union["Choice", int, str]) -> "Choice":
        """Accept a Choice, an index (0-2) or a name such as "rock" / "R"."""
        if isinstance(value, Choice):
            return value
        if isinstance(value, bool):
            raise ValueError(f"not a choice: {value!r}")
        if isinstance(value, int):
            if 0 <= value < len(cls):
                return cls(value)
            raise ValueError(f"choice index out of range: {value}")
        if isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                return cls.parse(int(key))
            if key in _ALIASES:
                return cls(_ALIASES[key])
        raise ValueError(f"not a choice: {value!r}")

    @property
    def emoji(self) -> str:
        return _EMOJI[self]


_EMOJI = {
    Choice.ROCK: "👊",
    Choice.PAPER: "✋",
    Choice.SCISSORS: "✌️",
}


class Outcome(str, Enum):
    PLAYER_WINS = "player"
    COMPUTER_WINS = "computer"
    DRAW = "draw"


def wins_over(choice: Choice) -> Choice:
    # Paper beats Rock, Scissors beats Paper, Rock beats Scissors
    return Choice((int(choice) + 1) % 3)


def outcome(player_choice: Choice, computer_choice: Choice) -> Outcome:
    if wins_over(player_choice) == computer_choice:
        return Outcome.COMPUTER_WINS
    if wins_over(computer_choice) == player_choice:
        return Outcome.PLAYER_WINS
    return Outcome.DRAW


@dataclass(frozen=True)
class Round:
    player_choice: Choice
    computer_choice: Choice

    @property
    def outcome(self) -> Outcome:
        return outcome(self.player_choice, self.computer_choice)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_choice": self.player_choice.name.lower(),
            "computer_choice": self.computer_choice.name.lower(),
            "outcome": self.outcome.value,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Round":
        return Round(
            player_choice=Choice.parse(d["player_choice"]),
            computer_choice=Choice.parse(d["computer_choice"]),
        )


@dataclass(frozen=True)
class Scoreboard:
    player_wins: int = 0
    computer_wins: int = 0
    draws: int = 0

    @property
    def rounds(self) -> int:
        return self.player_wins + self.computer_wins + self.draws

    @staticmethod
    def from_rounds(rounds: Iterable[Round]) -> "Scoreboard":
        counts = {o: 0 for o in Outcome}
        for r in rounds:
            counts[r.outcome] += 1
        return Scoreboard(
            player_wins=counts[Outcome.PLAYER_WINS],
            computer_wins=counts[Outcome.COMPUTER_WINS],
            draws=counts[Outcome.DRAW],
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "player_wins": self.player_wins,
            "computer_wins": self.computer_wins,
            "draws": self.draws,
            "rounds": self.rounds,
        }
