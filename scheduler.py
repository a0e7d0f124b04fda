"""
scheduler.py
Delayed callbacks on the running asyncio loop.

The motor loop never busy-waits: both the pause between commands and the
per-command settle time go through Timer.wait(), which suspends the task
until a one-shot call_later() handle fires.
"""

import asyncio


class Timer:
    def after(self, duration_ms: float, callback) -> asyncio.TimerHandle:
        """Run `callback()` once, at least `duration_ms` from now."""
        loop = asyncio.get_running_loop()
        return loop.call_later(max(0.0, duration_ms) / 1000.0, callback)

    async def wait(self, duration_ms: float):
        loop   = asyncio.get_running_loop()
        done   = loop.create_future()
        handle = self.after(duration_ms, lambda: done.done() or done.set_result(None))
        try:
            await done
        finally:
            handle.cancel()
