from __future__ import annotations

import logging
from time import perf_counter
from typing import Iterator, List, Optional, Sequence, Tuple

from ..systems import metrics as metrics_system
from ..types.metrics import FlockMetrics
from ..utils.vector import Vector2D
from .boid import Boid, create_boid
from .config import NEIGHBOR_SEARCH_MODES, Bounds, FlockParams
from .rng import FlockRng
from .spatial_grid import SpatialGrid

logger = logging.getLogger(__name__)


class Flock:
    """Ordered population of boids.

    Boids live in a plain list: ``grow`` appends to the tail and ``shrink``
    truncates it, so a boid's index is its only identity.

    ``step_all`` runs in two phases. Every steering force is computed against
    the unchanged population first; only then is each boid integrated. No boid
    ever observes another boid's post-step state within the same tick.
    """

    def __init__(self, rng: Optional[FlockRng] = None, neighbor_search: str = "brute"):
        if neighbor_search not in NEIGHBOR_SEARCH_MODES:
            raise ValueError(f"Unknown neighbor search mode: {neighbor_search}")
        self._rng = rng or FlockRng()
        self._boids: List[Boid] = []
        self._neighbor_search = neighbor_search
        self._grid = SpatialGrid(FlockParams().perception_radius)
        self._tick = 0
        self._metrics: FlockMetrics | None = None

    def __len__(self) -> int:
        return len(self._boids)

    def __iter__(self) -> Iterator[Boid]:
        return iter(self._boids)

    def __getitem__(self, index: int) -> Boid:
        return self._boids[index]

    @property
    def boids(self) -> Tuple[Boid, ...]:
        return tuple(self._boids)

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def metrics(self) -> FlockMetrics | None:
        return self._metrics

    @property
    def neighbor_search(self) -> str:
        return self._neighbor_search

    def add(self, boid: Boid) -> None:
        self._boids.append(boid)

    def grow(self, target_count: int, bounds: Bounds) -> None:
        added = 0
        while len(self._boids) < target_count:
            self._boids.append(create_boid(bounds, self._rng))
            added += 1
        if added:
            logger.debug("Flock grew by %d to %d boids", added, len(self._boids))

    def shrink(self, target_count: int) -> None:
        target = max(0, int(target_count))
        if target < len(self._boids):
            dropped = len(self._boids) - target
            del self._boids[target:]
            logger.debug("Flock shrank by %d to %d boids", dropped, target)

    def resize(self, target_count: int, bounds: Bounds) -> None:
        if target_count > len(self._boids):
            self.grow(target_count, bounds)
        else:
            self.shrink(target_count)

    def clear(self) -> None:
        self._boids.clear()
        self._tick = 0
        self._metrics = None

    def reseed(self, target_count: int, bounds: Bounds) -> None:
        self.clear()
        self._rng.reset()
        self.grow(target_count, bounds)

    def step_all(self, params: FlockParams, bounds: Bounds) -> FlockMetrics:
        start = perf_counter()
        boids = self._boids
        for boid in boids:
            boid.configure(params)

        forces, neighbor_checks = self._compute_forces(boids, params)

        for boid, force in zip(boids, forces):
            boid.apply_force(force)
            boid.update()
            boid.edges(bounds.width, bounds.height)

        duration_ms = (perf_counter() - start) * 1000.0
        self._metrics = metrics_system.create_metrics(self._tick, boids, neighbor_checks, duration_ms)
        self._tick += 1
        return self._metrics

    def _compute_forces(self, boids: Sequence[Boid], params: FlockParams) -> Tuple[List[Vector2D], int]:
        if self._neighbor_search == "grid":
            self._grid.rebuild(boids, params.perception_radius)
            forces = []
            neighbor_checks = 0
            for boid in boids:
                candidates = self._grid.candidates(boid.position)
                neighbor_checks += max(0, len(candidates) - 1)
                forces.append(boid.steering_force(candidates, params))
            return forces, neighbor_checks

        count = len(boids)
        forces = [boid.steering_force(boids, params) for boid in boids]
        return forces, count * max(0, count - 1)
