"""Client-side exam taking.

States move strictly forward: NOT_STARTED -> IN_PROGRESS -> SUBMITTED. The
countdown is driven by ``tick()``, once per second while the session runs;
reaching zero submits whatever has been answered.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from zuhri.client.api import AccessDeniedError, ApiClient, ApiError
from zuhri.client.periodic import PeriodicTask

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_SECONDS = 2


class ExamSessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class ExamSessionError(Exception):
    pass


class ExamSession:
    def __init__(self, client: ApiClient, course_id: int, tick_interval: float = 1.0):
        self.client = client
        self.course_id = course_id
        self.state = ExamSessionState.NOT_STARTED
        self.exam: Optional[Dict[str, Any]] = None
        self.questions: List[Dict[str, Any]] = []
        self.attempt_id: Optional[int] = None
        self.answers: Dict[str, str] = {}
        self.flagged: Set[str] = set()
        self.current_index = 0
        self.time_remaining = 0
        self.result: Optional[Dict[str, Any]] = None
        self.access_denied: Optional[AccessDeniedError] = None
        self.is_submitting = False
        self.submit_error: Optional[ApiError] = None
        self._countdown = PeriodicTask(tick_interval, self.tick, name=f"exam-{course_id}-countdown")

    @property
    def blocked(self) -> bool:
        return self.access_denied is not None

    @property
    def current_question(self) -> Optional[Dict[str, Any]]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def answered_count(self) -> int:
        question_ids = {str(q["id"]) for q in self.questions}
        return len(question_ids & set(self.answers))

    @property
    def can_submit(self) -> bool:
        return (
            self.state == ExamSessionState.IN_PROGRESS
            and not self.is_submitting
            and bool(self.questions)
            and self.answered_count == len(self.questions)
        )

    @property
    def redirect_after(self) -> int:
        if self.result is None:
            return DEFAULT_REDIRECT_SECONDS
        return self.result.get("redirectAfterSeconds", DEFAULT_REDIRECT_SECONDS)

    async def load(self) -> None:
        try:
            data = await self.client.get_course_exam(self.course_id)
        except AccessDeniedError as e:
            self.access_denied = e
            logger.info(f"Exam for course {self.course_id} locked: {e.completed}/{e.required} lessons completed")
            raise
        self.access_denied = None
        self.exam = data["exam"]
        self.questions = sorted(data.get("questions", []), key=lambda q: q.get("order", 0))
        self.current_index = 0

    async def start(self, run_countdown: bool = True) -> None:
        if self.blocked:
            raise ExamSessionError("exam is locked until all lessons are completed")
        if self.exam is None:
            raise ExamSessionError("load() must be called before start()")
        if self.state != ExamSessionState.NOT_STARTED:
            raise ExamSessionError(f"cannot start from state {self.state.value}")

        started = await self.client.start_exam(self.exam["id"])
        self.attempt_id = started["id"]
        # A resumed attempt brings back its saved answers and the time it has left.
        self.answers = {str(k): v for k, v in (started.get("answers") or {}).items()}
        self.time_remaining = int(started.get("remainingSeconds", self.exam["duration"] * 60))
        self.state = ExamSessionState.IN_PROGRESS
        if run_countdown:
            self._countdown.start()

    def answer(self, question_id, value: str) -> None:
        self._require_in_progress()
        self.answers[str(question_id)] = value

    def flag(self, question_id) -> None:
        self._require_in_progress()
        self.flagged.add(str(question_id))

    def unflag(self, question_id) -> None:
        self.flagged.discard(str(question_id))

    def go_to(self, index: int) -> None:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"question index {index} out of range")
        self.current_index = index

    def next(self) -> None:
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1

    def previous(self) -> None:
        if self.current_index > 0:
            self.current_index -= 1

    async def save(self) -> None:
        """Push current answers to the server so a refresh can resume them."""
        self._require_in_progress()
        await self.client.save_answers(self.attempt_id, self.answers)

    async def tick(self) -> None:
        if self.state != ExamSessionState.IN_PROGRESS:
            return
        self.time_remaining = max(self.time_remaining - 1, 0)
        if self.time_remaining == 0:
            await self.auto_submit()

    async def submit(self) -> Dict[str, Any]:
        if not self.can_submit:
            raise ExamSessionError("all questions must be answered before submitting")
        return await self._submit()

    async def auto_submit(self) -> Optional[Dict[str, Any]]:
        if self.state != ExamSessionState.IN_PROGRESS or self.is_submitting or self.submit_error is not None:
            return None
        logger.info(f"Time is up for attempt {self.attempt_id}, submitting automatically")
        try:
            return await self._submit()
        except ApiError as e:
            # Submission is a single call; the countdown stops and nothing is resent.
            self.submit_error = e
            logger.error(f"Automatic submission of attempt {self.attempt_id} failed: {e.message}")
            await self._countdown.stop()
            return None

    async def close(self) -> None:
        await self._countdown.stop()

    async def _submit(self) -> Dict[str, Any]:
        self.is_submitting = True
        try:
            result = await self.client.submit_attempt(self.attempt_id, dict(self.answers))
        finally:
            self.is_submitting = False
        self.result = result
        self.state = ExamSessionState.SUBMITTED
        await self._countdown.stop()
        return result

    def _require_in_progress(self) -> None:
        if self.state != ExamSessionState.IN_PROGRESS:
            raise ExamSessionError(f"exam is not in progress ({self.state.value})")
