from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..systems import steering
from ..utils.vector import Vector2D
from .config import Bounds, FlockParams
from .rng import FlockRng

SEPARATION_RATIO = 0.5
MIN_INITIAL_SPEED = 2.0
MAX_INITIAL_SPEED = 4.0

_default_rng = FlockRng()


@dataclass(slots=True, eq=False)
class Boid:
    position: Vector2D = field(default_factory=Vector2D)
    velocity: Vector2D = field(default_factory=Vector2D)
    acceleration: Vector2D = field(default_factory=Vector2D)
    max_force: float = 0.1
    max_speed: float = 4.0
    perception_radius: float = 50.0

    @property
    def separation_radius(self) -> float:
        return self.perception_radius * SEPARATION_RATIO

    def configure(self, params: FlockParams) -> None:
        self.max_speed = params.max_speed
        self.max_force = params.max_force
        self.perception_radius = params.perception_radius

    def heading(self) -> float:
        return self.velocity.heading()

    def align(self, boids: Sequence["Boid"]) -> Vector2D:
        return steering.alignment(self, boids)

    def cohesion(self, boids: Sequence["Boid"]) -> Vector2D:
        return steering.cohesion(self, boids)

    def separation(self, boids: Sequence["Boid"]) -> Vector2D:
        return steering.separation(self, boids)

    def steering_force(self, boids: Sequence["Boid"], params: FlockParams) -> Vector2D:
        """Weighted sum of the three rules. Reads ``boids`` without mutating anything."""
        return steering.combined_force(self, boids, params)

    def flock(self, boids: Sequence["Boid"], params: FlockParams) -> None:
        self.apply_force(self.steering_force(boids, params))

    def apply_force(self, force: Vector2D) -> None:
        self.acceleration.add(force)

    def update(self) -> None:
        self.velocity.add(self.acceleration)
        self.velocity.limit_magnitude(self.max_speed)
        self.position.add(self.velocity)
        self.acceleration.zero()

    def edges(self, width: float, height: float) -> None:
        position = self.position
        if position.x > width:
            position.x = 0.0
        elif position.x < 0:
            position.x = width
        if position.y > height:
            position.y = 0.0
        elif position.y < 0:
            position.y = height


def create_boid(bounds: Bounds, rng: Optional[FlockRng] = None) -> Boid:
    rng = rng or _default_rng
    position = Vector2D(rng.next_float() * bounds.width, rng.next_float() * bounds.height)
    velocity = rng.next_unit_circle().set_magnitude(rng.next_range(MIN_INITIAL_SPEED, MAX_INITIAL_SPEED))
    return Boid(position=position, velocity=velocity)
