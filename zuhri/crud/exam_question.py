from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.exam_question import ExamQuestion
from zuhri.schemas.exam_question import ExamQuestionCreate, ExamQuestionUpdate

class CRUDExamQuestion(CRUDBase[ExamQuestion, ExamQuestionCreate, ExamQuestionUpdate]):
    def get_by_exam(self, db: Session, *, exam_id: int) -> List[ExamQuestion]:
        return (
            db.query(ExamQuestion)
            .filter(ExamQuestion.exam_id == exam_id)
            .order_by(ExamQuestion.order, ExamQuestion.id)
            .all()
        )

    def next_order(self, db: Session, *, exam_id: int) -> int:
        current = db.query(func.max(ExamQuestion.order)).filter(ExamQuestion.exam_id == exam_id).scalar()
        return (current or 0) + 1

exam_question = CRUDExamQuestion(ExamQuestion)
