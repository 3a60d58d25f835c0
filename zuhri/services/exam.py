import logging
from typing import List
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from zuhri.crud.course import course as crud_course
from zuhri.crud.exam import exam as crud_exam
from zuhri.crud.exam_question import exam_question as crud_exam_question
from zuhri.models.exam import Exam
from zuhri.models.exam_question import ExamQuestion
from zuhri.models.user import User
from zuhri.schemas.exam import ExamCreate, ExamUpdate, ExamWithQuestions
from zuhri.schemas.exam_question import ExamQuestionCreate, ExamQuestionUpdate, clean_options
from zuhri.schemas.exam_question import ExamQuestion as ExamQuestionSchema
from zuhri.services.progress import progress_service

logger = logging.getLogger(__name__)

class ExamService:
    def list_exams(self, db: Session) -> List[Exam]:
        return crud_exam.get_all_active(db)

    def get_active_exam(self, db: Session, exam_id: int) -> Exam:
        exam = crud_exam.get(db, id=exam_id)
        if not exam:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found.")
        return exam

    def get_exam_for_admin(self, db: Session, exam_id: int) -> Exam:
        exam = crud_exam.get_any(db, id=exam_id)
        if not exam:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found.")
        return exam

    def get_course_exam(self, db: Session, *, user: User, course_id: int) -> ExamWithQuestions:
        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        progress_service.lesson_gate(db, user=user, course_id=course_id)

        exam = crud_exam.get_active_by_course(db, course_id=course_id)
        if not exam:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found for this course.")

        return ExamWithQuestions(exam=exam, questions=crud_exam_question.get_by_exam(db, exam_id=exam.id))

    def create_exam(self, db: Session, *, course_id: int, exam_in: ExamCreate) -> Exam:
        course = crud_course.get_any(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        exam = crud_exam.create(db, obj_in=exam_in, course_id=course.id, total_questions=0)
        logger.info(f"Exam {exam.id} created for course {course.id}")
        return exam

    def update_exam(self, db: Session, *, exam_id: int, exam_in: ExamUpdate) -> Exam:
        exam = self.get_exam_for_admin(db, exam_id)
        return crud_exam.update(db, db_obj=exam, obj_in=exam_in)

    def delete_exam(self, db: Session, *, exam_id: int) -> Exam:
        exam = self.get_exam_for_admin(db, exam_id)
        return crud_exam.delete(db, id=exam.id)

    def list_questions_for_admin(self, db: Session, *, exam_id: int) -> List[ExamQuestion]:
        exam = self.get_exam_for_admin(db, exam_id)
        return crud_exam_question.get_by_exam(db, exam_id=exam.id)

    def add_question(self, db: Session, *, exam_id: int, question_in: ExamQuestionCreate) -> ExamQuestion:
        exam = self.get_exam_for_admin(db, exam_id)
        data = question_in.model_dump(mode="json")
        if data.get("order") is None:
            data["order"] = crud_exam_question.next_order(db, exam_id=exam.id)
        question = crud_exam_question.create(db, obj_in=data, exam_id=exam.id, commit=False)
        crud_exam.refresh_question_count(db, exam=exam)
        db.commit()
        db.refresh(question)
        return question

    def update_question(self, db: Session, *, question_id: int, question_in: ExamQuestionUpdate) -> ExamQuestion:
        question = crud_exam_question.get(db, id=question_id)
        if not question:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")

        update_data = question_in.model_dump(mode="json", exclude_unset=True)
        options = update_data.get("options") or question.options
        correct_answer = (update_data.get("correct_answer") or question.correct_answer).strip()
        if correct_answer not in clean_options(options):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The correct answer must be one of the options.",
            )
        if "correct_answer" in update_data:
            update_data["correct_answer"] = correct_answer
        return crud_exam_question.update(db, db_obj=question, obj_in=update_data)

    def delete_question(self, db: Session, *, question_id: int) -> ExamQuestionSchema:
        question = crud_exam_question.get(db, id=question_id)
        if not question:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")
        exam = question.exam
        deleted = ExamQuestionSchema.model_validate(question)
        crud_exam_question.delete(db, id=question.id, commit=False)
        crud_exam.refresh_question_count(db, exam=exam)
        db.commit()
        return deleted

exam_service = ExamService()
