import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs ``callback`` every ``interval`` seconds until stopped.

    The owner calls ``start()`` when it becomes active and ``stop()`` when it
    goes away; a callback failure is logged and the next tick still runs.
    """

    def __init__(self, interval: float, callback: Callable[[], Awaitable[None]], name: str = "periodic-task"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.callback = callback
        self.name = name
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run(self._stop_event), name=self.name)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if self._stop_event is not None:
            self._stop_event.set()
        if task is None or task.done():
            return
        # Stopped from inside its own callback: the loop exits once the callback returns.
        if task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            await asyncio.sleep(self.interval)
            if stop_event.is_set():
                break
            try:
                await self.callback()
            except Exception as e:
                logger.error(f"{self.name} tick failed: {e}")
