from dataclasses import dataclass, field
from typing import List, Tuple

from geometry.GeoUtil import GeoUtil
from geometry.PointFloat import PointFloat


@dataclass
class Polyline:
    points: List[PointFloat] = field(default_factory=list)

    def length(self) -> float:
        return GeoUtil.polyline_length(self.points)

    def bounds(self) -> Tuple[float, float, float, float]:
        return GeoUtil.bounds(self.points)

    def is_closed(self) -> bool:
        return len(self.points) > 2 and self.points[0] == self.points[-1]

    def drop_duplicates(self) -> None:
        """Remove consecutive duplicate points in place."""
        out: List[PointFloat] = []
        for p in self.points:
            if not out or p != out[-1]:
                out.append(p)
        self.points = out
