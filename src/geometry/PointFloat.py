from dataclasses import dataclass
import math
from typing import Tuple

from geometry.VectorFloat import VectorFloat


@dataclass(frozen=True, slots=True)
class PointFloat:
    x: float
    y: float
    def as_tuple(self) -> Tuple[float, float]: return (self.x, self.y)
    def __add__(self, v: VectorFloat) -> "PointFloat": return PointFloat(self.x + v.x, self.y + v.y)
    def __sub__(self, p: "PointFloat") -> VectorFloat: return VectorFloat(self.x - p.x, self.y - p.y)
    def __abs__(self) -> float: return math.hypot(self.x, self.y)
    def midpoint(self, p: "PointFloat") -> "PointFloat": return PointFloat((self.x + p.x) / 2, (self.y + p.y) / 2)
    def is_finite(self) -> bool: return math.isfinite(self.x) and math.isfinite(self.y)
