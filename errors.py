"""
errors.py
Exceptions raised by the sequencer.

  SequencerError
   ├── EmptyQueue          dequeue() on an empty CommandQueue
   ├── InvalidCalibration  bad speed / power constant, raised at startup
   ├── InvalidStep         non-finite or non-numeric plan values
   ├── ActuatorFault       the motor binding failed to drive / stop
   └── QueueBusy           plan submitted or run started mid-run
"""


class SequencerError(Exception):
    """Base class for every error raised by the sequencer."""


class EmptyQueue(SequencerError):
    pass


class InvalidCalibration(SequencerError):
    pass


class InvalidStep(SequencerError):
    pass


class ActuatorFault(SequencerError):
    def __init__(self, message: str, channel: str | None = None):
        self.channel = channel
        super().__init__(message)

    def __str__(self):
        if self.channel:
            return f"{self.args[0]} (channel={self.channel})"
        return self.args[0]


class QueueBusy(SequencerError):
    pass
