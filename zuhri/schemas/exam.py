from pydantic import ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from zuhri.core.constants import DEFAULT_PASSING_GRADE
from zuhri.schemas.base import CamelModel
from zuhri.schemas.exam_question import ExamQuestionPublic

class ExamBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    duration: int = Field(..., ge=1, le=300, description="Duration in minutes")
    passing_grade: float = Field(DEFAULT_PASSING_GRADE, ge=1, le=100)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "title": "الاختبار النهائي",
            "description": "اختبار نهاية المادة",
            "duration": 30,
            "passingGrade": 70
        }
    })

class ExamCreate(ExamBase):
    pass

class ExamUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    duration: Optional[int] = Field(None, ge=1, le=300)
    passing_grade: Optional[float] = Field(None, ge=1, le=100)
    is_active: Optional[bool] = None

class Exam(CamelModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    duration: int
    passing_grade: float
    total_questions: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None

class ExamWithQuestions(CamelModel):
    """What a student sees before starting: the exam and its questions, answers stripped."""
    exam: Exam
    questions: List[ExamQuestionPublic] = []
