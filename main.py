"""
main.py  -  timed motion sequencer
─────────────────────────────────────────────────────────────────────────────
Pipeline (runs once per plan file):

  plan.json   [{"angle": 90, "distance": 0}, {"angle": 0, "distance": 1}, ...]
    │
    ▼  PlanningAgent      (angle, distance) → LEFT/RIGHT turn + FORWARD/BACKWARD move
    │
    ▼  CommandQueue       FIFO, insertion order = execution order
    │
    ▼  MotorControlAgent  pause → drive → wait duration → stop, one at a time
    │
    ▼  robot_tools        CAN frames to the left / right motor controllers
                          (or printed to console with STUB_HARDWARE=1)

Usage:
    python main.py plan.json
    PLAN_FILE=plan.json python main.py

Ctrl-C stops both motors before exiting.
─────────────────────────────────────────────────────────────────────────────
"""

import argparse
import asyncio
import json
import os

from dotenv import load_dotenv

from agents.motor_control import MotorControlAgent
from calibration import CalibrationConstants, command_pause_from_env
from commands import PlannedStep
from robot_tools import open_actuator

load_dotenv()

ROBOT_ID         = os.getenv("ROBOT_ID",         "robot-1")
PLAN_FILE        = os.getenv("PLAN_FILE",        "")
LEGACY_BACKWARD  = os.getenv("LEGACY_BACKWARD",  "0") == "1"


def load_plan(path: str) -> list[PlannedStep]:
    """Read a plan file: a JSON list of steps, or {"steps": [...]}."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("steps", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of steps")
    return [PlannedStep.from_dict(step, index=i) for i, step in enumerate(data)]


async def main(plan_file: str):
    calibration = CalibrationConstants.from_env()
    actuator    = open_actuator()
    motor       = MotorControlAgent(
        actuator,
        calibration,
        command_pause_ms=command_pause_from_env(),
        legacy_backward=LEGACY_BACKWARD,
        robot_id=ROBOT_ID,
    )

    try:
        motor.brake()
        steps = load_plan(plan_file)
        print(f"[main] loaded {len(steps)} steps from {plan_file}")
        print(f"[main] {await motor.execute(steps)}")
    finally:
        actuator.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a timed motion plan on the robot.")
    parser.add_argument("plan", nargs="?", default=PLAN_FILE, help="path to a JSON plan file")
    args = parser.parse_args()
    if not args.plan:
        parser.error("no plan file given (pass a path or set PLAN_FILE in .env)")

    try:
        asyncio.run(main(args.plan))
    except KeyboardInterrupt:
        print("\n[main] interrupted - motors stopped")
