from typing import List, Optional
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.exam import Exam
from zuhri.models.exam_question import ExamQuestion
from zuhri.schemas.exam import ExamCreate, ExamUpdate

class CRUDExam(CRUDBase[Exam, ExamCreate, ExamUpdate]):
    def get_active_by_course(self, db: Session, *, course_id: int) -> Optional[Exam]:
        return (
            db.query(Exam)
            .filter(Exam.course_id == course_id, Exam.is_active == True)
            .order_by(Exam.created_at.desc(), Exam.id.desc())
            .first()
        )

    def get_all_active(self, db: Session) -> List[Exam]:
        return db.query(Exam).filter(Exam.is_active == True).order_by(Exam.id).all()

    def count_active(self, db: Session) -> int:
        return db.query(Exam).filter(Exam.is_active == True).count()

    def refresh_question_count(self, db: Session, *, exam: Exam) -> Exam:
        exam.total_questions = db.query(ExamQuestion).filter(ExamQuestion.exam_id == exam.id).count()
        db.add(exam)
        db.flush()
        return exam

exam = CRUDExam(Exam)
