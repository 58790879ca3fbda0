from dataclasses import dataclass, field
from typing import List, Tuple

from geometry.GeoUtil import GeoUtil
from geometry.Polyline import Polyline


@dataclass
class Geometry:
    polylines: List[Polyline] = field(default_factory=list)

    def bounds(self) -> Tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) over all polylines"""
        return GeoUtil.bounds(p for pl in self.polylines for p in pl.points)

    def point_count(self) -> int:
        return sum(len(pl.points) for pl in self.polylines)
