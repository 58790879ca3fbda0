from abc import ABC, abstractmethod
from typing import List

from geometry.PointFloat import PointFloat


class Shape(ABC):
    """A shape defined by an ordered list of base points."""

    @abstractmethod
    def get_base_points(self) -> List[PointFloat]:
        raise NotImplementedError
