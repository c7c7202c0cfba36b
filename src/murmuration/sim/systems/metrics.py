from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from ..types.metrics import FlockMetrics

if TYPE_CHECKING:
    from ..core.boid import Boid


def create_metrics(tick: int, boids: Sequence[Boid], neighbor_checks: int, duration_ms: float) -> FlockMetrics:
    population = len(boids)
    speed_sum = 0.0
    heading_x = 0.0
    heading_y = 0.0
    for boid in boids:
        velocity = boid.velocity
        speed = math.hypot(velocity.x, velocity.y)
        speed_sum += speed
        if speed > 1e-12:
            heading_x += velocity.x / speed
            heading_y += velocity.y / speed
    if population == 0:
        average_speed = 0.0
        polarization = 0.0
    else:
        average_speed = speed_sum / population
        polarization = math.hypot(heading_x, heading_y) / population
    return FlockMetrics(
        tick=tick,
        population=population,
        average_speed=average_speed,
        polarization=polarization,
        neighbor_checks=neighbor_checks,
        tick_duration_ms=duration_ms,
    )
