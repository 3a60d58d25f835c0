from pydantic import Field
from typing import List, Optional
from datetime import datetime

from zuhri.schemas.base import CamelModel
from zuhri.schemas.enrollment import Enrollment

class LessonProgressReport(CamelModel):
    """A playback report. ``is_completed`` is advisory; the server derives completion."""
    watched_duration: int = Field(..., ge=0)
    is_completed: bool = False
    course_id: Optional[int] = None

class LessonProgress(CamelModel):
    id: int
    user_id: int
    lesson_id: int
    course_id: int
    watched_duration: int
    is_completed: bool
    completed_at: Optional[datetime] = None
    last_watched_at: Optional[datetime] = None

class CourseProgress(CamelModel):
    enrollment: Optional[Enrollment] = None
    progress: float = 0.0
    completed_lessons: int = 0
    total_lessons: int = 0
    lessons: List[LessonProgress] = []
