from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self * scalar

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def normalized(self) -> Vec2:
        magnitude_sq = self.length_sq()
        if magnitude_sq <= 0.0:
            return Vec2()
        inv_magnitude = 1.0 / math.sqrt(magnitude_sq)
        return Vec2(self.x * inv_magnitude, self.y * inv_magnitude)

    def is_origin(self) -> bool:
        return self.x == 0.0 and self.y == 0.0
