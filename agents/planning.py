"""
Planning Agent
Converts a motion plan into an ordered list of timed motor commands.

Each planned step is (angle, distance) and becomes at most two commands:
  angle > 0     → LEFT      for  angle / rotational_speed_right  ms
  angle < 0     → RIGHT     for -angle / rotational_speed_left   ms
  distance > 0  → FORWARD   for  distance / forward_speed        ms
  distance < 0  → BACKWARD  for -distance / forward_speed        ms

The turn always comes before the move. Zero angle / zero distance emit
nothing. Durations are open-loop, so they are exactly the quotient of the
plan value and the calibration constant - no rounding.

legacy_backward=True reproduces the older controller rule, which picked
BACKWARD only when the *angle* was negative. With that rule a reverse
move on a straight or left-turning step has no direction and is skipped.
"""

import math

from calibration import CalibrationConstants, is_number
from commands import Direction, PlannedStep, PrimitiveCommand
from errors import InvalidStep


def _check_value(name: str, value, index: int | None):
    where = f"step {index}" if index is not None else "step"
    if not is_number(value):
        raise InvalidStep(f"{where}: {name} must be a number, got {value!r}")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidStep(f"{where}: {name} must be finite, got {value!r}")


def _timed_command(direction: Direction, magnitude: float, speed: float, index: int | None) -> PrimitiveCommand:
    # huge plan values overflow to inf, tiny ones underflow to 0.0
    try:
        duration_ms = magnitude / speed
    except OverflowError:
        duration_ms = math.inf
    if not math.isfinite(duration_ms) or duration_ms <= 0:
        where = f"step {index}" if index is not None else "step"
        raise InvalidStep(f"{where}: {direction.value} of {magnitude!r} gives unusable duration {duration_ms!r}ms")
    return PrimitiveCommand(direction, duration_ms)


def translate_step(
    step: PlannedStep,
    calibration: CalibrationConstants,
    legacy_backward: bool = False,
    index: int | None = None,
) -> list[PrimitiveCommand]:
    _check_value("angle", step.angle, index)
    _check_value("distance", step.distance, index)

    commands: list[PrimitiveCommand] = []

    if step.angle > 0:
        commands.append(_timed_command(Direction.LEFT, step.angle, calibration.rotational_speed_right, index))
    elif step.angle < 0:
        commands.append(_timed_command(Direction.RIGHT, -step.angle, calibration.rotational_speed_left, index))

    if step.distance > 0:
        commands.append(_timed_command(Direction.FORWARD, step.distance, calibration.forward_speed, index))
    elif step.distance < 0:
        reverse = step.angle < 0 if legacy_backward else True
        if reverse:
            commands.append(_timed_command(Direction.BACKWARD, -step.distance, calibration.forward_speed, index))
        else:
            print(f"[planning]   legacy rule: dropping reverse move of {step.distance} "
                  f"(angle {step.angle} is not negative)")

    return commands


class PlanningAgent:
    def __init__(self, calibration: CalibrationConstants, legacy_backward: bool = False):
        self.calibration     = calibration
        self.legacy_backward = legacy_backward

    def plan(self, steps: list[PlannedStep]) -> list[PrimitiveCommand]:
        """
        Translate a whole batch. Every step is validated before anything is
        returned, so one bad step rejects the batch instead of half of it
        reaching the queue.
        """
        commands: list[PrimitiveCommand] = []
        for i, step in enumerate(steps):
            if not isinstance(step, PlannedStep):
                step = PlannedStep.from_dict(step, index=i)
            print(f"[planning] turn: {step.angle}, go forward: {step.distance}")
            commands.extend(translate_step(step, self.calibration, self.legacy_backward, index=i))
        return commands
