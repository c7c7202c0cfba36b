from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..core.config import FlockParams
from ..utils.vector import Vector2D

if TYPE_CHECKING:
    from ..core.boid import Boid

# Floor for the squared distance in the separation term; coincident boids push with zero force.
MIN_SEPARATION_DISTANCE_SQ = 1e-6


def _steer_towards(agent: Boid, desired: Vector2D) -> Vector2D:
    return desired.set_magnitude(agent.max_speed).subtract(agent.velocity).limit_magnitude(agent.max_force)


def alignment(agent: Boid, boids: Iterable[Boid]) -> Vector2D:
    steering = Vector2D()
    total = 0
    radius = agent.perception_radius
    for other in boids:
        if other is agent:
            continue
        if Vector2D.distance(agent.position, other.position) < radius:
            steering.add(other.velocity)
            total += 1
    if total > 0:
        steering.divide(total)
        _steer_towards(agent, steering)
    return steering


def cohesion(agent: Boid, boids: Iterable[Boid]) -> Vector2D:
    steering = Vector2D()
    total = 0
    radius = agent.perception_radius
    for other in boids:
        if other is agent:
            continue
        if Vector2D.distance(agent.position, other.position) < radius:
            steering.add(other.position)
            total += 1
    if total > 0:
        steering.divide(total).subtract(agent.position)
        _steer_towards(agent, steering)
    return steering


def separation(agent: Boid, boids: Iterable[Boid]) -> Vector2D:
    """Inverse-square repulsion from boids inside the separation radius."""
    steering = Vector2D()
    total = 0
    radius = agent.separation_radius
    for other in boids:
        if other is agent:
            continue
        distance = Vector2D.distance(agent.position, other.position)
        if distance < radius:
            diff = Vector2D.difference(agent.position, other.position)
            diff.divide(max(distance * distance, MIN_SEPARATION_DISTANCE_SQ))
            steering.add(diff)
            total += 1
    if total > 0:
        steering.divide(total)
        _steer_towards(agent, steering)
    return steering


def combined_force(agent: Boid, boids: Iterable[Boid], params: FlockParams) -> Vector2D:
    neighbors = boids if isinstance(boids, (list, tuple)) else list(boids)
    force = alignment(agent, neighbors).scale(params.align_weight)
    force.add(cohesion(agent, neighbors).scale(params.cohesion_weight))
    force.add(separation(agent, neighbors).scale(params.separation_weight))
    return force
