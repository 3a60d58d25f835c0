from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from zuhri.crud.base import CRUDBase
from zuhri.models.enrollment import Enrollment

class CRUDEnrollment(CRUDBase[Enrollment, None, None]):
    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
            .first()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[Enrollment]:
        return (
            db.query(Enrollment)
            .options(selectinload(Enrollment.course))
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
            .all()
        )

    def count_completed_by_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(Enrollment)
            .filter(Enrollment.user_id == user_id, Enrollment.completed_at.isnot(None))
            .count()
        )

    def count(self, db: Session) -> int:
        return db.query(Enrollment).count()

enrollment = CRUDEnrollment(Enrollment)
