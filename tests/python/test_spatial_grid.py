from __future__ import annotations

import pytest

from murmuration.sim.core.boid import Boid
from murmuration.sim.core.rng import FlockRng
from murmuration.sim.core.spatial_grid import SpatialGrid
from murmuration.sim.utils.vector import Vector2D


def _boids(positions):
    return [Boid(position=Vector2D(x, y)) for x, y in positions]


def test_candidates_cover_every_boid_within_perception_radius():
    rng = FlockRng(31)
    boids = _boids([(rng.next_range(0, 300), rng.next_range(0, 200)) for _ in range(80)])
    radius = 35.0
    grid = SpatialGrid(radius)
    grid.rebuild(boids, radius)

    for boid in boids:
        found = set(map(id, grid.candidates(boid.position)))
        within = {id(other) for other in boids if Vector2D.distance(boid.position, other.position) < radius}
        assert within <= found


def test_candidates_come_from_adjacent_cells_only():
    grid = SpatialGrid(10.0)
    boids = _boids([(5, 5), (14, 5), (25, 5), (-3, -3)])
    grid.rebuild(boids, 10.0)

    found = grid.candidates(Vector2D(5, 5))
    assert set(map(id, found)) == {id(boids[0]), id(boids[1]), id(boids[3])}


def test_rebuild_tracks_moved_boids_and_new_radius():
    boid = Boid(position=Vector2D(0.5, 0.5))
    grid = SpatialGrid(2.0)
    grid.rebuild([boid], 2.0)
    assert grid.candidates(Vector2D(0, 0)) == [boid]

    boid.position.x = 50.0
    grid.rebuild([boid], 2.0)
    assert grid.candidates(Vector2D(0, 0)) == []

    grid.rebuild([boid], 40.0)
    assert grid.cell_size == 40.0
    assert grid.candidates(Vector2D(0, 0)) == [boid]


@pytest.mark.parametrize("radius", [0.0, -5.0])
def test_non_positive_radius_keeps_a_usable_cell_size(radius):
    grid = SpatialGrid(radius)
    boids = _boids([(0, 0), (100, 100)])
    grid.rebuild(boids, radius)
    assert grid.cell_size > 0
    assert grid.candidates(Vector2D(0, 0)) == [boids[0]]
