from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

from .choices import Choice
from .utils import one_hot


class Layout(str, Enum):
    MINIMAL = "minimal"
    EXTENDED = "extended"

    @property
    def width(self) -> int:
        return 3 if self is Layout.MINIMAL else 6


class MoveEncoder:
    """Turn the most recent round into the network's input vector.

    minimal:  one-hot of the player's last choice (width 3)
    extended: player one-hot in [0, 3) and computer one-hot in [3, 6) (width 6)

    The layout is fixed for the lifetime of the encoder.
    """

    def __init__(self, layout: Layout = Layout.EXTENDED):
        self.layout = Layout(layout)
        self.width = self.layout.width

    def encode(self, player_choice: Choice, computer_choice: Optional[Choice] = None) -> np.ndarray:
        v = one_hot(int(player_choice), self.width)
        if self.layout is Layout.EXTENDED and computer_choice is not None:
            v[3 + int(computer_choice)] = 1.0
        return v

    def blank(self) -> np.ndarray:
        return np.zeros(self.width, dtype=np.float32)
