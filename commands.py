"""
commands.py
Plan and command types shared by the planner and the motor loop.

  PlannedStep       one entry of a motion plan: turn by `angle` degrees
                    (positive = left), then travel `distance` units
                    (positive = forward)
  PrimitiveCommand  one timed motor action produced from a PlannedStep
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from errors import InvalidStep


class Direction(str, Enum):
    FORWARD  = "FORWARD"
    BACKWARD = "BACKWARD"
    LEFT     = "LEFT"
    RIGHT    = "RIGHT"
    STOP     = "STOP"


@dataclass(frozen=True)
class PlannedStep:
    angle:    float = 0.0
    distance: float = 0.0

    @classmethod
    def from_dict(cls, data: dict, index: int | None = None) -> "PlannedStep":
        """Build a step from a plan-file entry like {"angle": 90, "distance": 0}."""
        if not isinstance(data, Mapping):
            where = f"step {index}" if index is not None else "step"
            raise InvalidStep(f"{where}: expected an object with angle / distance, got {data!r}")
        return cls(angle=data.get("angle", 0), distance=data.get("distance", 0))


@dataclass(frozen=True)
class PrimitiveCommand:
    direction:   Direction
    duration_ms: float

    def __str__(self):
        return f"{self.direction.value} {self.duration_ms:.1f}ms"
