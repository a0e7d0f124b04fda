"""
command_queue.py
FIFO of PrimitiveCommands waiting for the motor loop.

Not thread-safe: MotorControlAgent is the only consumer and it runs on
a single asyncio task.
"""

from collections import deque

from commands import PrimitiveCommand
from errors import EmptyQueue


class CommandQueue:
    def __init__(self):
        self._items: deque[PrimitiveCommand] = deque()

    def enqueue(self, command: PrimitiveCommand):
        self._items.append(command)

    def dequeue(self) -> PrimitiveCommand:
        if not self._items:
            raise EmptyQueue("dequeue from an empty command queue")
        return self._items.popleft()

    def peek(self) -> PrimitiveCommand:
        if not self._items:
            raise EmptyQueue("peek at an empty command queue")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> int:
        """Drop every pending command, returning how many were discarded."""
        dropped = len(self._items)
        self._items.clear()
        return dropped

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
