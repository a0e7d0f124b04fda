"""
robot_tools.py
Low-level motor I/O used by MotorControlAgent.

Set STUB_HARDWARE=1 in .env to run without the CAN bus (prints to console).
In stub mode the full sequencer still runs - plans are translated, queued
and timed exactly as on the robot, only the frames never leave the process.

Each motor channel has its own CAN id; every frame is 8 bytes:
  Left motor   → CAN 0x101
  Right motor  → CAN 0x102
  buf[0] = mode   (0 stop, 1 forward, 2 reverse, 3 brake)
  buf[1] = power  (PWM 0-255, 0 for stop / brake)
"""

import os
from typing import Protocol

import can

from errors import ActuatorFault
from tools._can import open_bus, send

CHANNELS  = ("left", "right")
MOTOR_IDS = {"left": 0x101, "right": 0x102}
MODES     = {"stop": 0, "forward": 1, "reverse": 2, "brake": 3}


class Actuator(Protocol):
    def drive(self, channel: str, direction: str, power: int): ...

    def stop(self, channel: str): ...

    def brake(self, channel: str): ...


def motor_frame(mode: str, power: int = 0) -> list[int]:
    return [MODES[mode], power & 0xFF, 0, 0, 0, 0, 0, 0]


def _motor_id(channel: str) -> int:
    arb_id = MOTOR_IDS.get(channel)
    if arb_id is None:
        raise ValueError(f"unknown motor channel {channel!r}, options: {list(MOTOR_IDS)}")
    return arb_id


def _check_direction(direction: str):
    if direction not in ("forward", "reverse"):
        raise ValueError(f"unknown drive direction {direction!r}")


class CanActuator:
    """Drives both motors over CAN. Bus errors surface as ActuatorFault."""

    def __init__(self, bus: can.BusABC):
        self._bus = bus

    def _send(self, channel: str, mode: str, power: int = 0):
        arb_id = _motor_id(channel)
        try:
            send(self._bus, arb_id, motor_frame(mode, power))
        except can.CanError as e:
            raise ActuatorFault(f"CAN {mode} frame failed: {e}", channel) from e

    def drive(self, channel: str, direction: str, power: int):
        _check_direction(direction)
        self._send(channel, direction, power)

    def stop(self, channel: str):
        self._send(channel, "stop")

    def brake(self, channel: str):
        self._send(channel, "brake")

    def close(self):
        self._bus.shutdown()


class StubActuator:
    """Prints the frames CanActuator would send and keeps a log of them."""

    def __init__(self):
        self.frames: list[tuple[int, list[int]]] = []

    def _send(self, channel: str, mode: str, power: int = 0):
        arb_id = _motor_id(channel)
        data   = motor_frame(mode, power)
        self.frames.append((arb_id, data))
        print(f"[CAN stub]  0x{arb_id:03X}  {data}")

    def drive(self, channel: str, direction: str, power: int):
        _check_direction(direction)
        self._send(channel, direction, power)

    def stop(self, channel: str):
        self._send(channel, "stop")

    def brake(self, channel: str):
        self._send(channel, "brake")

    def close(self):
        pass


def open_actuator(stub: bool | None = None):
    # Read at call time so load_dotenv() has already run
    if stub is None:
        stub = os.getenv("STUB_HARDWARE", "0") == "1"
    if stub:
        print("[robot_tools] STUB mode - CAN disabled, commands print to console")
        return StubActuator()
    return CanActuator(open_bus())
