from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from zuhri.core.constants import ExamAttemptStatusEnum
from zuhri.crud.base import CRUDBase
from zuhri.models.exam_attempt import ExamAttempt

class CRUDExamAttempt(CRUDBase[ExamAttempt, None, None]):
    def get_by_user_and_exam(self, db: Session, *, user_id: int, exam_id: int) -> List[ExamAttempt]:
        return (
            db.query(ExamAttempt)
            .filter(ExamAttempt.user_id == user_id, ExamAttempt.exam_id == exam_id)
            .order_by(ExamAttempt.started_at.desc(), ExamAttempt.id.desc())
            .all()
        )

    def get_in_progress(self, db: Session, *, user_id: int, exam_id: int) -> Optional[ExamAttempt]:
        return (
            db.query(ExamAttempt)
            .filter(
                ExamAttempt.user_id == user_id,
                ExamAttempt.exam_id == exam_id,
                ExamAttempt.status == ExamAttemptStatusEnum.IN_PROGRESS,
            )
            .order_by(ExamAttempt.id.desc())
            .first()
        )

    def get_all_in_progress(self, db: Session) -> List[ExamAttempt]:
        return (
            db.query(ExamAttempt)
            .filter(ExamAttempt.status == ExamAttemptStatusEnum.IN_PROGRESS)
            .all()
        )

    def get_user_average_passed_score(self, db: Session, *, user_id: int) -> float:
        result = (
            db.query(func.avg(ExamAttempt.score))
            .filter(ExamAttempt.user_id == user_id, ExamAttempt.passed == True)
            .scalar()
        )
        return float(result or 0)

exam_attempt = CRUDExamAttempt(ExamAttempt)
