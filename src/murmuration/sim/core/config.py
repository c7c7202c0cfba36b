from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

NEIGHBOR_SEARCH_MODES = ("brute", "grid")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class FlockParams:
    boid_count: int = 150
    align_weight: float = 1.0
    cohesion_weight: float = 1.0
    separation_weight: float = 1.5
    perception_radius: float = 50.0
    max_speed: float = 4.0
    max_force: float = 0.1


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float


@dataclass
class ViewerConfig:
    fps: int = 60
    trail_alpha: float = 0.15
    boid_color: tuple[int, int, int] = (255, 255, 255)
    background_color: tuple[int, int, int] = (0, 0, 0)
    panel_color: tuple[int, int, int] = (17, 24, 39)
    text_color: tuple[int, int, int] = (229, 231, 235)
    show_controls: bool = True


@dataclass
class SimulationConfig:
    width: float = 800.0
    height: float = 600.0
    seed: Optional[int] = None
    neighbor_search: str = "brute"
    params: FlockParams = field(default_factory=FlockParams)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.width, self.height)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def _checked(cls: type, raw: dict, section: str) -> dict:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} key(s): {', '.join(unknown)}")
    return raw


def load_config(raw: dict) -> SimulationConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping at the top level, got {type(raw).__name__}")

    def _color(value: tuple[int, int, int] | list[int] | None, default: tuple[int, int, int]) -> tuple[int, int, int]:
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return (int(value[0]), int(value[1]), int(value[2]))
        return default

    params = FlockParams(**_checked(FlockParams, raw.get("params") or {}, "params"))
    viewer_raw = dict(_checked(ViewerConfig, raw.get("viewer") or {}, "viewer"))
    default_viewer = ViewerConfig()
    for name in ("boid_color", "background_color", "panel_color", "text_color"):
        viewer_raw[name] = _color(viewer_raw.get(name), getattr(default_viewer, name))
    viewer = ViewerConfig(**viewer_raw)
    sim_values = _checked(
        SimulationConfig,
        {k: v for k, v in raw.items() if k not in {"params", "viewer"}},
        "simulation",
    )
    config = SimulationConfig(params=params, viewer=viewer, **sim_values)
    if config.neighbor_search not in NEIGHBOR_SEARCH_MODES:
        raise ConfigError(
            f"neighbor_search must be one of {', '.join(NEIGHBOR_SEARCH_MODES)}, got {config.neighbor_search!r}"
        )
    return config
