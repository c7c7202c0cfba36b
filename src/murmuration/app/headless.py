from __future__ import annotations

import argparse
import csv
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ..sim.core.config import NEIGHBOR_SEARCH_MODES, SimulationConfig
from ..sim.core.flock import Flock
from ..sim.core.rng import FlockRng
from ..sim.types.metrics import FlockMetrics

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "avg_speed",
    "polarization",
    "neighbor_checks",
    "neighbor_checks_per_agent",
    "tick_ms",
]


def _format_row(metrics: FlockMetrics, tick_ms: float) -> list[object]:
    population = metrics.population
    per_agent = 0.0 if population <= 0 else metrics.neighbor_checks / population
    return [
        metrics.tick,
        population,
        f"{metrics.average_speed:.4f}",
        f"{metrics.polarization:.4f}",
        metrics.neighbor_checks,
        f"{per_agent:.4f}",
        f"{tick_ms:.3f}",
    ]


# Polarization at which the flock counts as moving together.
ALIGNED_POLARIZATION = 0.9


def _series_summary(values: list[float]) -> dict[str, float]:
    if not values:
        return {"initial": 0.0, "final": 0.0, "mean": 0.0, "min": 0.0, "max": 0.0}
    return {
        "initial": float(values[0]),
        "final": float(values[-1]),
        "mean": float(sum(values) / len(values)),
        "min": float(min(values)),
        "max": float(max(values)),
    }


def _first_aligned_tick(polarization: list[float]) -> Optional[int]:
    for tick, value in enumerate(polarization):
        if value >= ALIGNED_POLARIZATION:
            return tick
    return None


def run_headless(
    steps: int,
    config: Optional[SimulationConfig] = None,
    log_path: Optional[Path] = None,
    deterministic_log: bool = False,
    summary_path: Optional[Path] = None,
) -> Flock:
    config = config or SimulationConfig()
    if config.neighbor_search not in NEIGHBOR_SEARCH_MODES:
        raise ValueError(f"Unknown neighbor search mode: {config.neighbor_search}")
    params = config.params
    bounds = config.bounds
    flock = Flock(FlockRng(config.seed), neighbor_search=config.neighbor_search)
    flock.grow(params.boid_count, bounds)
    logger.info(
        "Running %d steps with %d boids in %gx%g (%s neighbor search)",
        steps,
        len(flock),
        bounds.width,
        bounds.height,
        config.neighbor_search,
    )

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    polarization_series: list[float] = []
    checks_per_agent_series: list[float] = []

    try:
        for _ in range(steps):
            metrics = flock.step_all(params, bounds)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            speed_series.append(metrics.average_speed)
            polarization_series.append(metrics.polarization)
            checks_per_agent_series.append(
                0.0 if metrics.population <= 0 else metrics.neighbor_checks / metrics.population
            )
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "population": len(flock),
            "neighbor_search": config.neighbor_search,
            "deterministic_log": deterministic_log,
            "average_speed": _series_summary(speed_series),
            "polarization": _series_summary(polarization_series),
            "neighbor_checks_per_agent": _series_summary(checks_per_agent_series),
            "tick_ms": _series_summary(tick_ms_series),
            "aligned_tick": _first_aligned_tick(polarization_series),
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("Finished %d steps", flock.tick)
    return flock


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless boids simulation")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--count", type=int, default=None, help="Override the boid count")
    parser.add_argument("--width", type=float, default=None)
    parser.add_argument("--height", type=float, default=None)
    parser.add_argument("--neighbor-search", choices=list(NEIGHBOR_SEARCH_MODES), default=None)
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick metrics")
    parser.add_argument("--summary", type=Path, default=None, help="JSON file to write run summary")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Force tick_ms to 0.000 so runs with identical seeds produce identical logs.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.count is not None:
        config.params = replace(config.params, boid_count=args.count)
    if args.width is not None:
        config.width = args.width
    if args.height is not None:
        config.height = args.height
    if args.neighbor_search is not None:
        config.neighbor_search = args.neighbor_search
    run_headless(
        args.steps,
        config,
        args.log,
        deterministic_log=args.deterministic_log,
        summary_path=args.summary,
    )


if __name__ == "__main__":
    main()
