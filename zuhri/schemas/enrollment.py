from typing import Optional
from datetime import datetime

from zuhri.schemas.base import CamelModel
from zuhri.schemas.course import Course

class Enrollment(CamelModel):
    id: int
    user_id: int
    course_id: int
    enrolled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    progress: float = 0.0

class EnrollmentWithCourse(Enrollment):
    course: Course
