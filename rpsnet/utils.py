from __future__ import annotations

import logging
from typing import Union

import numpy as np

LOG_FORMAT = "%(asctime)s - %(name)-16s - %(levelname)-8s - %(message)s"


def softmax(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.float32)
    x = x - np.max(x)
    ex = np.exp(x)
    return ex / np.sum(ex)


def one_hot(i: int, n: int) -> np.ndarray:
    v = np.zeros(n, dtype=np.float32)
    if 0 <= i < n:
        v[i] = 1.0
    return v


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a root handler for scripts and the server. Library code only logs."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
