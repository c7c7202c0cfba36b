from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from pygame.math import Vector2

if TYPE_CHECKING:
    from .boid import Boid

_MIN_CELL_SIZE = 1e-3
_BLOCK = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 0), (0, 1), (1, -1), (1, 0), (1, 1))


class SpatialGrid:
    """Buckets boids into square cells whose side is the perception radius.

    Anything within one perception radius of a point lies in the 3x3 block of
    cells around it, so ``candidates`` never misses a neighbour. It does not
    filter by distance; the steering rules apply their own strict tests.
    """

    def __init__(self, perception_radius: float) -> None:
        self._cell_size = max(perception_radius, _MIN_CELL_SIZE)
        self._cells: Dict[Tuple[int, int], List["Boid"]] = {}

    @property
    def cell_size(self) -> float:
        return self._cell_size

    def rebuild(self, boids: Iterable["Boid"], perception_radius: float) -> None:
        self._cell_size = max(perception_radius, _MIN_CELL_SIZE)
        cells: Dict[Tuple[int, int], List["Boid"]] = defaultdict(list)
        for boid in boids:
            cells[self._cell_of(boid.position)].append(boid)
        self._cells = dict(cells)

    def candidates(self, position: Vector2) -> List["Boid"]:
        col, row = self._cell_of(position)
        found: List["Boid"] = []
        for dc, dr in _BLOCK:
            found.extend(self._cells.get((col + dc, row + dr), ()))
        return found

    def _cell_of(self, position: Vector2) -> Tuple[int, int]:
        return (int(position.x // self._cell_size), int(position.y // self._cell_size))
