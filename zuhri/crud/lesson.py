from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.lesson import Lesson
from zuhri.schemas.lesson import LessonCreate, LessonUpdate

class CRUDLesson(CRUDBase[Lesson, LessonCreate, LessonUpdate]):
    def get_by_course(self, db: Session, *, course_id: int) -> List[Lesson]:
        return (
            db.query(Lesson)
            .filter(Lesson.course_id == course_id, Lesson.is_active == True)
            .order_by(Lesson.order, Lesson.id)
            .all()
        )

    def count_active_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(Lesson).filter(Lesson.course_id == course_id, Lesson.is_active == True).count()

    def next_order(self, db: Session, *, course_id: int) -> int:
        current: Optional[int] = db.query(func.max(Lesson.order)).filter(Lesson.course_id == course_id).scalar()
        return (current or 0) + 1

lesson = CRUDLesson(Lesson)
