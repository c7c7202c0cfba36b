from __future__ import annotations

import math
import random
from typing import Optional

from ..utils.vector import Vector2D


class FlockRng:
    """Random source for initial conditions. Unseeded by default."""

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_float(self) -> float:
        return self._random.random()

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_unit_circle(self) -> Vector2D:
        angle = self._random.uniform(0, 2 * math.pi)
        vector = Vector2D()
        vector.from_polar((1, math.degrees(angle)))
        return vector
