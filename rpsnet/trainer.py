from __future__ import annotations

from .choices import Choice, wins_over

DEFAULT_LEARNING_RATE = 0.1


class RoundTrainer:
    """One backward step per round.

    The target is the move that beats what the player just played, so the
    network's arg-max becomes a forecast of the counter to the player's next
    move. The learning rate is fixed for the whole session.
    """

    def __init__(self, network, learning_rate: float = DEFAULT_LEARNING_RATE):
        self.network = network
        self.learning_rate = float(learning_rate)

    @staticmethod
    def target_for(player_choice: Choice) -> Choice:
        return wins_over(player_choice)

    def train(self, player_choice: Choice) -> Choice:
        target = self.target_for(player_choice)
        self.network.backward(int(target), self.learning_rate)
        return target
