"""
calibration.py
Fixed conversion constants for the drive base.

Speeds are measured once on the real robot and never change while it runs:
  ROTATIONAL_SPEED_RIGHT  degrees/ms, used for left (positive) turns
  ROTATIONAL_SPEED_LEFT   degrees/ms, used for right (negative) turns
  FORWARD_SPEED           distance units/ms
  MOTOR_POWER             PWM level sent with every drive command (1-255)

Anything that would make a duration undefined is rejected when the
constants are built, so a bad .env fails at startup instead of mid-plan.
"""

import math
import os
from dataclasses import dataclass
from numbers import Real

from errors import InvalidCalibration

DEFAULT_ROTATIONAL_SPEED_RIGHT = 0.1
DEFAULT_ROTATIONAL_SPEED_LEFT  = 0.1
DEFAULT_FORWARD_SPEED          = 0.00089
DEFAULT_MOTOR_POWER            = 255
DEFAULT_COMMAND_PAUSE_MS       = 1000


def is_number(value) -> bool:
    """True for real numbers, bool excluded."""
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class CalibrationConstants:
    rotational_speed_right: float = DEFAULT_ROTATIONAL_SPEED_RIGHT
    rotational_speed_left:  float = DEFAULT_ROTATIONAL_SPEED_LEFT
    forward_speed:          float = DEFAULT_FORWARD_SPEED
    motor_power:            int   = DEFAULT_MOTOR_POWER

    def __post_init__(self):
        for name in ("rotational_speed_right", "rotational_speed_left", "forward_speed"):
            value = getattr(self, name)
            if not is_number(value):
                raise InvalidCalibration(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidCalibration(f"{name} must be a positive finite speed, got {value!r}")

        power = self.motor_power
        if isinstance(power, bool) or not isinstance(power, int) or not 1 <= power <= 255:
            raise InvalidCalibration(f"motor_power must be an integer in 1..255, got {power!r}")

    @classmethod
    def from_env(cls) -> "CalibrationConstants":
        """Read the constants from the environment (call after load_dotenv())."""
        return cls(
            rotational_speed_right=_env_number("ROTATIONAL_SPEED_RIGHT", DEFAULT_ROTATIONAL_SPEED_RIGHT, float),
            rotational_speed_left=_env_number("ROTATIONAL_SPEED_LEFT", DEFAULT_ROTATIONAL_SPEED_LEFT, float),
            forward_speed=_env_number("FORWARD_SPEED", DEFAULT_FORWARD_SPEED, float),
            motor_power=_env_number("MOTOR_POWER", DEFAULT_MOTOR_POWER, int),
        )


def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise InvalidCalibration(f"{name}={raw!r} is not a valid {cast.__name__}") from None


def command_pause_from_env(default: float = DEFAULT_COMMAND_PAUSE_MS) -> float:
    """Pause between queued commands in ms, from COMMAND_PAUSE_MS."""
    pause = _env_number("COMMAND_PAUSE_MS", default, float)
    check_command_pause(pause)
    return pause


def check_command_pause(pause) -> None:
    if not is_number(pause) or not math.isfinite(pause) or pause < 0:
        raise InvalidCalibration(f"command pause must be a finite, non-negative number of ms, got {pause!r}")
