from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List

from ..sim.core.config import FlockParams


@dataclass(frozen=True)
class Control:
    name: str
    field: str
    min_value: float
    max_value: float
    step: float

    @property
    def decimals(self) -> int:
        return 2 if self.step < 1 else 0

    def format(self, value: float) -> str:
        return f"{value:.{self.decimals}f}"


CONTROLS: List[Control] = [
    Control("Boids", "boid_count", 10, 300, 10),
    Control("Alignment", "align_weight", 0.0, 2.5, 0.1),
    Control("Cohesion", "cohesion_weight", 0.0, 2.5, 0.1),
    Control("Separation", "separation_weight", 0.0, 2.5, 0.1),
    Control("Perception", "perception_radius", 10, 200, 1),
    Control("Max Speed", "max_speed", 1.0, 10.0, 0.1),
    Control("Max Force", "max_force", 0.01, 0.5, 0.01),
]


def adjust(params: FlockParams, control: Control, direction: int) -> FlockParams:
    """Move one control by ``direction`` steps, clamped to its range and snapped to its step grid."""
    current = getattr(params, control.field)
    value = current + control.step * direction
    value = max(control.min_value, min(control.max_value, value))
    steps = round((value - control.min_value) / control.step)
    value = min(control.max_value, control.min_value + steps * control.step)
    value = round(value, control.decimals)
    if control.field == "boid_count":
        value = int(value)
    return replace(params, **{control.field: value})


def describe(params: FlockParams) -> List[str]:
    return [f"{control.name}: {control.format(getattr(params, control.field))}" for control in CONTROLS]
