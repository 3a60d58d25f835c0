from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zuhri.models.user import User
from zuhri.schemas.exam import Exam
from zuhri.schemas.exam_attempt import AnswersPayload, AttemptStarted, ExamAttempt, ExamResult
from zuhri.schemas.response import APIResponse
from zuhri.services.exam import exam_service
from zuhri.services.exam_attempt import exam_attempt_service
from zuhri.utils import deps

router = APIRouter()

@router.get("/exams", response_model=APIResponse[List[Exam]])
def list_exams(db: Session = Depends(deps.get_db)):
    exams = exam_service.list_exams(db)
    return APIResponse(message="Exams retrieved successfully", data=[Exam.model_validate(e) for e in exams])

@router.post("/exams/{exam_id}/start", response_model=APIResponse[AttemptStarted], status_code=status.HTTP_201_CREATED)
async def start_exam(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    current_user: User = Depends(deps.get_current_user)
):
    started = await exam_attempt_service.start(db, user=current_user, exam_id=exam_id)
    return APIResponse(message="Exam attempt started", data=started)

@router.get("/exams/{exam_id}/attempts", response_model=APIResponse[List[ExamAttempt]])
def list_my_attempts(
    exam_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    attempts = exam_attempt_service.list_for_exam(db, user=current_user, exam_id=exam_id)
    return APIResponse(message="Attempts retrieved successfully", data=[ExamAttempt.model_validate(a) for a in attempts])

@router.put("/exam-attempts/{attempt_id}/answers", response_model=APIResponse[AttemptStarted])
def save_attempt_answers(
    *,
    db: Session = Depends(deps.get_transactional_db),
    attempt_id: int,
    payload: AnswersPayload,
    current_user: User = Depends(deps.get_current_user)
):
    saved = exam_attempt_service.save_answers(db, user=current_user, attempt_id=attempt_id, answers=payload.answers)
    return APIResponse(message="Answers saved", data=saved)

@router.post("/exam-attempts/{attempt_id}/submit", response_model=APIResponse[ExamResult])
async def submit_attempt(
    *,
    db: Session = Depends(deps.get_transactional_db),
    attempt_id: int,
    payload: AnswersPayload,
    current_user: User = Depends(deps.get_current_user)
):
    result = await exam_attempt_service.submit(db, user=current_user, attempt_id=attempt_id, answers=payload.answers)
    return APIResponse(message="Exam submitted successfully", data=result)

@router.get("/exam-attempts/{attempt_id}", response_model=APIResponse[ExamAttempt])
def get_attempt(
    attempt_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    attempt = exam_attempt_service.get_attempt(db, user=current_user, attempt_id=attempt_id)
    return APIResponse(message="Attempt retrieved successfully", data=ExamAttempt.model_validate(attempt))
