from pydantic import Field
from typing import Dict, Optional
from datetime import datetime

from zuhri.core.constants import ExamAttemptStatusEnum
from zuhri.schemas.base import CamelModel

class AnswersPayload(CamelModel):
    """Question id -> chosen option text. Keys arrive as strings over JSON."""
    answers: Dict[str, str] = Field(default_factory=dict)

class AttemptStarted(CamelModel):
    id: int
    exam_id: int
    started_at: datetime
    expires_at: datetime
    remaining_seconds: int
    answers: Dict[str, str] = {}

class ExamResult(CamelModel):
    attempt_id: int
    score: float
    correct_answers: int
    total_questions: int
    passed: bool
    certificate_id: Optional[int] = None
    redirect_after_seconds: int

class ExamAttempt(CamelModel):
    id: int
    user_id: int
    exam_id: int
    course_id: int
    answers: Dict[str, str] = {}
    score: Optional[float] = None
    total_questions: int = 0
    correct_answers: int = 0
    passed: bool = False
    status: ExamAttemptStatusEnum
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration: Optional[int] = None
