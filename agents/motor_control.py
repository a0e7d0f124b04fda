"""
Motor Control Agent
Executes the command queue built from a motion plan, one command at a time.

For every queued command:
  1. wait the fixed inter-command pause (COMMAND_PAUSE_MS, 1000 ms default)
  2. dequeue the head and drive both motors for its direction
  3. wait the command's own duration, then stop both motors

There is no feedback sensor - step 3 is the only way a motion "finishes",
so the timing is the motion. Waits go through scheduler.Timer, which keeps
the event loop free while the robot is moving.

Only one run may be in flight; set_queue() and run_queue() raise QueueBusy
while a run is active. cancel() is the emergency stop.
"""

import asyncio

from agents.planning import PlanningAgent
from calibration import DEFAULT_COMMAND_PAUSE_MS, CalibrationConstants, check_command_pause
from command_queue import CommandQueue
from commands import Direction, PlannedStep, PrimitiveCommand
from errors import QueueBusy
from robot_tools import CHANNELS, Actuator
from scheduler import Timer

# (left, right) wheel direction for each turn / move
WHEEL_DIRECTIONS = {
    Direction.FORWARD:  ("forward", "forward"),
    Direction.BACKWARD: ("reverse", "reverse"),
    Direction.LEFT:     ("reverse", "forward"),
    Direction.RIGHT:    ("forward", "reverse"),
}


class MotorControlAgent:
    def __init__(
        self,
        actuator: Actuator,
        calibration: CalibrationConstants,
        timer: Timer | None = None,
        command_pause_ms: float = DEFAULT_COMMAND_PAUSE_MS,
        legacy_backward: bool = False,
        robot_id: str = "robot",
    ):
        check_command_pause(command_pause_ms)
        self.actuator         = actuator
        self.calibration      = calibration
        self.timer            = timer or Timer()
        self.command_pause_ms = command_pause_ms
        self.robot_id         = robot_id
        self.queue            = CommandQueue()
        self.planner          = PlanningAgent(calibration, legacy_backward=legacy_backward)

        self._running   = False
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._running

    # ── Plan submission ───────────────────────────────────────────────────────

    def set_queue(self, steps: list[PlannedStep]) -> int:
        """
        Translate `steps` and append the commands to the queue.
        Does not start execution. Returns the number of commands queued.
        """
        if self._running:
            raise QueueBusy("cannot change the queue while a plan is running")

        print(f"[motor] {self.robot_id}: set queue with {len(steps)} steps")
        commands = self.planner.plan(steps)
        for command in commands:
            self.queue.enqueue(command)
        return len(commands)

    # ── Execution loop ────────────────────────────────────────────────────────

    async def run_queue(self) -> int:
        """
        Drain the queue. No-op when idle and empty.
        Returns the number of commands executed.
        """
        if self._running:
            raise QueueBusy("a plan is already running")
        if self.queue.is_empty():
            return 0

        self._running   = True
        self._cancelled = False
        executed = 0
        print(f"[motor] {self.robot_id}: executing {len(self.queue)} commands")

        try:
            while not self.queue.is_empty():
                await self.timer.wait(self.command_pause_ms)
                if self._cancelled or self.queue.is_empty():
                    break
                await self.move(self.queue.dequeue())
                executed += 1
        except asyncio.CancelledError:
            dropped = self.queue.clear()
            print(f"[motor] run cancelled - stopping motors, {dropped} commands dropped")
            self._stop_all()
            raise
        except BaseException as e:
            # ActuatorFault, or anything an unwrapped backend raises
            dropped = self.queue.clear()
            print(f"[motor] fault: {e!r} - aborting, {dropped} commands dropped")
            self._stop_all()
            raise
        finally:
            self._running = False

        print(f"[motor] {self.robot_id}: idle after {executed} commands")
        return executed

    async def move(self, command: PrimitiveCommand):
        print(f"[motor]   direction: {command.direction.value}, duration: {command.duration_ms:.1f}ms")
        await self.motor_control(command.direction, command.duration_ms)

    async def motor_control(self, direction: Direction, duration_ms: float):
        if direction == Direction.STOP:
            for channel in CHANNELS:
                self.actuator.stop(channel)
            return

        left, right = WHEEL_DIRECTIONS[direction]
        power = self.calibration.motor_power
        self.actuator.drive("left", left, power)
        self.actuator.drive("right", right, power)
        await self.motor_duration(duration_ms)

    async def motor_duration(self, duration_ms: float):
        """Let the current motion run for `duration_ms`, then stop both motors."""
        await self.timer.wait(duration_ms)
        for channel in CHANNELS:
            self.actuator.stop(channel)

    async def execute(self, steps: list[PlannedStep]) -> str:
        if not steps:
            return "No steps to execute."
        self.set_queue(steps)
        executed = await self.run_queue()
        return f"Done - {executed} commands completed."

    # ── Safety ────────────────────────────────────────────────────────────────

    def brake(self):
        """Hold both motors with the brake (used once the board is up)."""
        for channel in CHANNELS:
            self.actuator.brake(channel)
        print(f"[motor] {self.robot_id}: brakes on")

    def cancel(self):
        """
        Emergency stop: stop both motors now, drop whatever is queued and
        keep the running loop from dequeuing anything else.
        """
        self._cancelled = True
        dropped = self.queue.clear()
        print(f"[motor] {self.robot_id}: emergency stop, {dropped} commands dropped")
        self._stop_all()

    def _stop_all(self):
        # Best effort: try every channel even if one of them fails.
        for channel in CHANNELS:
            try:
                self.actuator.stop(channel)
            except Exception as e:
                print(f"[motor]   could not stop {channel} motor: {e}")
