from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.lesson import Lesson
from zuhri.models.lesson_progress import LessonProgress

class CRUDLessonProgress(CRUDBase[LessonProgress, None, None]):
    def get_by_user_and_lesson(self, db: Session, *, user_id: int, lesson_id: int) -> Optional[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id)
            .first()
        )

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> List[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id, LessonProgress.course_id == course_id)
            .order_by(LessonProgress.lesson_id)
            .all()
        )

    def count_completed_active_lessons(self, db: Session, *, user_id: int, course_id: int) -> int:
        """Completed rows whose lesson is still active; soft-deleted lessons do not count."""
        return (
            db.query(LessonProgress)
            .join(Lesson, Lesson.id == LessonProgress.lesson_id)
            .filter(
                LessonProgress.user_id == user_id,
                LessonProgress.course_id == course_id,
                LessonProgress.is_completed == True,
                Lesson.is_active == True,
            )
            .count()
        )

    def sum_completed_lesson_seconds(self, db: Session, *, user_id: int) -> int:
        result = (
            db.query(func.sum(Lesson.duration))
            .join(LessonProgress, LessonProgress.lesson_id == Lesson.id)
            .filter(LessonProgress.user_id == user_id, LessonProgress.is_completed == True)
            .scalar()
        )
        return int(result or 0)

lesson_progress = CRUDLessonProgress(LessonProgress)
