import asyncio

import pytest

from zuhri.client.periodic import PeriodicTask


@pytest.mark.asyncio
async def test_runs_until_stopped():
    ticks = []

    async def callback():
        ticks.append(1)

    task = PeriodicTask(0.01, callback, name="test")
    task.start()
    assert task.running
    await asyncio.sleep(0.06)
    await task.stop()
    assert not task.running
    count = len(ticks)
    assert count >= 2
    await asyncio.sleep(0.03)
    assert len(ticks) == count


@pytest.mark.asyncio
async def test_failing_callback_keeps_ticking():
    ticks = []

    async def callback():
        ticks.append(1)
        raise RuntimeError("boom")

    task = PeriodicTask(0.01, callback)
    task.start()
    await asyncio.sleep(0.05)
    await task.stop()
    assert len(ticks) >= 2


@pytest.mark.asyncio
async def test_callback_can_stop_its_own_task():
    ticks = []
    task = None

    async def callback():
        ticks.append(1)
        await task.stop()

    task = PeriodicTask(0.01, callback)
    task.start()
    await asyncio.sleep(0.05)
    assert ticks == [1]
    assert not task.running


@pytest.mark.asyncio
async def test_start_twice_keeps_one_loop():
    ticks = []

    async def callback():
        ticks.append(1)

    task = PeriodicTask(0.02, callback)
    task.start()
    first = task._task
    task.start()
    assert task._task is first
    await task.stop()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicTask(0, lambda: None)
