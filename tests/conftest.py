"""
Shared fixtures: a timer that never sleeps and an actuator that records
every call, both writing into one event log so tests can assert on the
exact interleaving of pauses, drives and stops.
"""

import asyncio

import pytest

from calibration import CalibrationConstants
from agents.motor_control import MotorControlAgent


class FakeTimer:
    def __init__(self, events: list, on_wait=None):
        self.events  = events
        self.on_wait = on_wait
        self.waits: list[float] = []

    def after(self, duration_ms, callback):
        self.waits.append(duration_ms)
        self.events.append(("wait", duration_ms))
        callback()

    async def wait(self, duration_ms):
        self.waits.append(duration_ms)
        self.events.append(("wait", duration_ms))
        if self.on_wait is not None:
            result = self.on_wait(duration_ms)
            if asyncio.iscoroutine(result):
                await result
        await asyncio.sleep(0)


class RecordingActuator:
    def __init__(self, events: list):
        self.events = events

    def drive(self, channel, direction, power):
        self.events.append(("drive", channel, direction, power))

    def stop(self, channel):
        self.events.append(("stop", channel))

    def brake(self, channel):
        self.events.append(("brake", channel))

    def close(self):
        pass


@pytest.fixture
def events():
    return []


@pytest.fixture
def calibration():
    return CalibrationConstants(
        rotational_speed_right=0.1,
        rotational_speed_left=0.1,
        forward_speed=0.00089,
        motor_power=255,
    )


@pytest.fixture
def timer(events):
    return FakeTimer(events)


@pytest.fixture
def actuator(events):
    return RecordingActuator(events)


@pytest.fixture
def agent(actuator, calibration, timer):
    return MotorControlAgent(actuator, calibration, timer=timer, robot_id="test-bot")
