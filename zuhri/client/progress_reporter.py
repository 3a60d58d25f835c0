import logging
import math
from typing import Any, Awaitable, Callable, Optional, Tuple

from zuhri.client.api import ApiClient, ApiError, UnauthorizedError
from zuhri.client.periodic import PeriodicTask

logger = logging.getLogger(__name__)

COMPLETION_RATIO = 0.9
EMBEDDED_PLAYER_INTERVAL = 5.0
NATIVE_PLAYER_INTERVAL = 10.0

# (current_time, duration, is_playing) in seconds
PositionProvider = Callable[[], Tuple[float, float, bool]]


def is_lesson_completed(watched: int, duration: float) -> bool:
    return duration > 0 and watched >= COMPLETION_RATIO * duration


class ProgressReporter:
    """Reports lesson playback position for one lesson.

    Reports are fire-and-forget: a failed report is logged and dropped, the
    next tick sends a fresh position.
    """

    def __init__(
        self,
        client: ApiClient,
        lesson_id: int,
        course_id: Optional[int] = None,
        position_provider: Optional[PositionProvider] = None,
        interval: float = NATIVE_PLAYER_INTERVAL,
        on_progress: Optional[Callable[[Any], Awaitable[None]]] = None,
    ):
        self.client = client
        self.lesson_id = lesson_id
        self.course_id = course_id
        self.position_provider = position_provider
        self.on_progress = on_progress
        self._ticker = PeriodicTask(interval, self._tick, name=f"lesson-{lesson_id}-progress")

    @property
    def running(self) -> bool:
        return self._ticker.running

    def start(self) -> None:
        if self.position_provider is None:
            raise ValueError("a position provider is required for periodic reporting")
        self._ticker.start()

    async def stop(self) -> None:
        await self._ticker.stop()

    async def report(self, current_time: float, duration: float) -> bool:
        watched = int(math.floor(max(current_time, 0)))
        return await self._send(watched, is_lesson_completed(watched, duration))

    async def ended(self, duration: float) -> bool:
        """Playback reached the end: report the whole lesson as watched."""
        await self.stop()
        return await self._send(int(math.floor(duration)), True)

    async def _tick(self) -> None:
        current_time, duration, is_playing = self.position_provider()
        if is_playing and duration > 0:
            await self.report(current_time, duration)

    async def _send(self, watched: int, is_completed: bool) -> bool:
        try:
            result = await self.client.report_lesson_progress(
                self.lesson_id, watched_duration=watched, is_completed=is_completed, course_id=self.course_id
            )
        except UnauthorizedError:
            await self.stop()
            return False
        except ApiError as e:
            logger.warning(f"Dropped progress report for lesson {self.lesson_id}: {e.message}")
            return False

        if self.on_progress is not None:
            await self.on_progress(result)
        return True
