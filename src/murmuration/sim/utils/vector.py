from __future__ import annotations

import math

from pygame.math import Vector2


class Vector2D(Vector2):
    """``Vector2`` with chainable in-place operations.

    Degenerate inputs (zero divisors, zero-length vectors) leave the vector
    unchanged instead of raising like the pygame methods do.
    """

    def add(self, other: Vector2) -> "Vector2D":
        self += other
        return self

    def subtract(self, other: Vector2) -> "Vector2D":
        self -= other
        return self

    def scale(self, scalar: float) -> "Vector2D":
        self *= scalar
        return self

    def divide(self, scalar: float) -> "Vector2D":
        if scalar != 0:
            self /= scalar
        return self

    def magnitude(self) -> float:
        return self.length()

    def normalize(self) -> "Vector2D":
        if self.length_squared() > 0.0:
            self.normalize_ip()
        return self

    def set_magnitude(self, length: float) -> "Vector2D":
        return self.normalize().scale(length)

    def limit_magnitude(self, max_length: float) -> "Vector2D":
        if self.length_squared() > max_length * max_length:
            self.scale_to_length(max_length)
        return self

    def heading(self) -> float:
        return math.atan2(self.y, self.x)

    def zero(self) -> "Vector2D":
        self.update(0.0, 0.0)
        return self

    def copy(self) -> "Vector2D":
        return Vector2D(self.x, self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @staticmethod
    def distance(a: Vector2, b: Vector2) -> float:
        return a.distance_to(b)

    @staticmethod
    def difference(a: Vector2, b: Vector2) -> "Vector2D":
        return Vector2D(a.x - b.x, a.y - b.y)
