"""
tools/_can.py
Shared CAN bus connection used by robot_tools.CanActuator.

Set STUB_HARDWARE=1 in .env to skip this module entirely - robot_tools
then prints frames to console instead of sending real CAN messages, so
plans can be dry-run on a laptop without the robot wired up.
"""

import os

import can


def open_bus(channel: str | None = None, interface: str | None = None) -> can.BusABC:
    # Read at call time, not import time, so load_dotenv() has run
    channel   = channel   or os.getenv("CAN_CHANNEL", "can0")
    interface = interface or os.getenv("CAN_BUSTYPE", "socketcan")
    # Linux / Jetson (socketcan):   channel="can0",        interface="socketcan"
    # USB-CAN adapter (slcan):      channel="/dev/ttyUSB1", interface="slcan"
    print(f"[can] opening {interface} bus on {channel}")
    return can.interface.Bus(channel=channel, interface=interface)


def send(bus: can.BusABC, arb_id: int, data: list[int]):
    msg = can.Message(arbitration_id=arb_id, data=data, is_extended_id=False)
    bus.send(msg)
