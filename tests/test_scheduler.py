import asyncio

import pytest

from scheduler import Timer


@pytest.mark.asyncio
async def test_after_fires_once():
    fired = []
    done  = asyncio.Event()

    def callback():
        fired.append(True)
        done.set()

    Timer().after(5, callback)
    await asyncio.wait_for(done.wait(), timeout=1)
    await asyncio.sleep(0.02)
    assert fired == [True]


@pytest.mark.asyncio
async def test_wait_suspends_at_least_duration():
    loop  = asyncio.get_running_loop()
    start = loop.time()
    await Timer().wait(20)
    assert loop.time() - start >= 0.015


@pytest.mark.asyncio
async def test_wait_does_not_block_other_tasks():
    ticks = []

    async def ticker():
        for _ in range(3):
            ticks.append(True)
            await asyncio.sleep(0)

    await asyncio.gather(Timer().wait(10), ticker())
    assert len(ticks) == 3


@pytest.mark.asyncio
async def test_cancelled_wait_cancels_handle():
    task = asyncio.create_task(Timer().wait(10_000))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
