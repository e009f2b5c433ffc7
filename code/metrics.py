"""Helpers for collecting instrumentation data during dungeon generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class StepMetrics:
    """Aggregated metrics for a single pipeline step across invocations."""

    name: str
    invocations: int = 0
    total_time: float = 0.0
    total_rooms_added: int = 0
    total_floor_tiles_added: int = 0

    def record(self, duration: float, rooms_delta: int, floor_tiles_delta: int) -> None:
        self.invocations += 1
        self.total_time += duration
        self.total_rooms_added += rooms_delta
        self.total_floor_tiles_added += floor_tiles_delta

    def to_dict(self) -> Dict[str, float | int]:
        average_time = self.total_time / self.invocations if self.invocations else 0.0
        return {
            "invocations": self.invocations,
            "total_time": self.total_time,
            "average_time": average_time,
            "total_rooms_added": self.total_rooms_added,
            "total_floor_tiles_added": self.total_floor_tiles_added,
        }


@dataclass
class GenerationMetrics:
    """Container for step metrics and corridor search counts recorded during a generation run."""

    steps: Dict[str, StepMetrics] = field(default_factory=dict)
    searches_attempted: int = 0
    searches_failed: int = 0

    def record_step_run(
        self,
        name: str,
        duration: float,
        rooms_delta: int,
        floor_tiles_delta: int,
    ) -> None:
        metrics = self.steps.get(name)
        if metrics is None:
            metrics = StepMetrics(name=name)
            self.steps[name] = metrics
        metrics.record(duration, rooms_delta, floor_tiles_delta)

    def record_searches(self, attempted: int, failed: int) -> None:
        self.searches_attempted += attempted
        self.searches_failed += failed

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        result = {name: metrics.to_dict() for name, metrics in self.steps.items()}
        result["corridor_search"] = {
            "attempted": self.searches_attempted,
            "failed": self.searches_failed,
        }
        return result
