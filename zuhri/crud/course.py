from typing import List
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.course import Course
from zuhri.models.lesson import Lesson
from zuhri.schemas.course import CourseCreate, CourseUpdate

class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):
    def get_active(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Course]:
        return (
            db.query(Course)
            .filter(Course.is_active == True)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_active(self, db: Session) -> int:
        return db.query(Course).filter(Course.is_active == True).count()

    def refresh_lesson_count(self, db: Session, *, course: Course) -> Course:
        course.total_lessons = (
            db.query(Lesson)
            .filter(Lesson.course_id == course.id, Lesson.is_active == True)
            .count()
        )
        db.add(course)
        db.flush()
        return course

course = CRUDCourse(Course)
