from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zuhri.models.user import User
from zuhri.schemas.course import Course, CourseCreate, CourseUpdate
from zuhri.schemas.exam import Exam, ExamCreate, ExamUpdate
from zuhri.schemas.exam_question import ExamQuestion, ExamQuestionCreate, ExamQuestionUpdate
from zuhri.schemas.lesson import Lesson, LessonCreate, LessonUpdate
from zuhri.schemas.response import APIResponse
from zuhri.schemas.stats import AdminStats
from zuhri.services.course import course_service
from zuhri.services.exam import exam_service
from zuhri.services.stats import stats_service
from zuhri.utils import deps

router = APIRouter()

@router.get("/dashboard", response_model=APIResponse[AdminStats])
def get_admin_dashboard(
    db: Session = Depends(deps.get_db),
    admin: User = Depends(deps.get_current_admin)
):
    return APIResponse(message="Admin stats retrieved successfully", data=stats_service.admin_stats(db))

@router.post("/courses", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
async def create_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_in: CourseCreate,
    admin: User = Depends(deps.get_current_admin)
):
    course = await course_service.create_course(db, course_in=course_in)
    return APIResponse(message="Course created successfully", data=Course.model_validate(course))

@router.patch("/courses/{course_id}", response_model=APIResponse[Course])
async def update_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    course_in: CourseUpdate,
    admin: User = Depends(deps.get_current_admin)
):
    course = await course_service.update_course(db, course_id=course_id, course_in=course_in)
    return APIResponse(message="Course updated successfully", data=Course.model_validate(course))

@router.delete("/courses/{course_id}", response_model=APIResponse[Course])
async def delete_course(
    course_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    course = await course_service.delete_course(db, course_id=course_id)
    return APIResponse(message="Course deleted successfully", data=Course.model_validate(course))

@router.post("/courses/{course_id}/lessons", response_model=APIResponse[Lesson], status_code=status.HTTP_201_CREATED)
async def create_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    lesson_in: LessonCreate,
    admin: User = Depends(deps.get_current_admin)
):
    lesson = await course_service.create_lesson(db, course_id=course_id, lesson_in=lesson_in)
    return APIResponse(message="Lesson created successfully", data=Lesson.model_validate(lesson))

@router.patch("/lessons/{lesson_id}", response_model=APIResponse[Lesson])
async def update_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    lesson_in: LessonUpdate,
    admin: User = Depends(deps.get_current_admin)
):
    lesson = await course_service.update_lesson(db, lesson_id=lesson_id, lesson_in=lesson_in)
    return APIResponse(message="Lesson updated successfully", data=Lesson.model_validate(lesson))

@router.delete("/lessons/{lesson_id}", response_model=APIResponse[Lesson])
async def delete_lesson(
    lesson_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    lesson = await course_service.delete_lesson(db, lesson_id=lesson_id)
    return APIResponse(message="Lesson deleted successfully", data=Lesson.model_validate(lesson))

@router.post("/courses/{course_id}/exams", response_model=APIResponse[Exam], status_code=status.HTTP_201_CREATED)
def create_exam(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    exam_in: ExamCreate,
    admin: User = Depends(deps.get_current_admin)
):
    exam = exam_service.create_exam(db, course_id=course_id, exam_in=exam_in)
    return APIResponse(message="Exam created successfully", data=Exam.model_validate(exam))

@router.patch("/exams/{exam_id}", response_model=APIResponse[Exam])
def update_exam(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    exam_in: ExamUpdate,
    admin: User = Depends(deps.get_current_admin)
):
    exam = exam_service.update_exam(db, exam_id=exam_id, exam_in=exam_in)
    return APIResponse(message="Exam updated successfully", data=Exam.model_validate(exam))

@router.delete("/exams/{exam_id}", response_model=APIResponse[Exam])
def delete_exam(
    exam_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    exam = exam_service.delete_exam(db, exam_id=exam_id)
    return APIResponse(message="Exam deleted successfully", data=Exam.model_validate(exam))

@router.get("/exams/{exam_id}/questions", response_model=APIResponse[List[ExamQuestion]])
def list_exam_questions(
    exam_id: int,
    db: Session = Depends(deps.get_db),
    admin: User = Depends(deps.get_current_admin)
):
    questions = exam_service.list_questions_for_admin(db, exam_id=exam_id)
    return APIResponse(message="Questions retrieved successfully", data=[ExamQuestion.model_validate(q) for q in questions])

@router.post("/exams/{exam_id}/questions", response_model=APIResponse[ExamQuestion], status_code=status.HTTP_201_CREATED)
def create_exam_question(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    question_in: ExamQuestionCreate,
    admin: User = Depends(deps.get_current_admin)
):
    question = exam_service.add_question(db, exam_id=exam_id, question_in=question_in)
    return APIResponse(message="Question created successfully", data=ExamQuestion.model_validate(question))

@router.patch("/questions/{question_id}", response_model=APIResponse[ExamQuestion])
def update_exam_question(
    *,
    db: Session = Depends(deps.get_transactional_db),
    question_id: int,
    question_in: ExamQuestionUpdate,
    admin: User = Depends(deps.get_current_admin)
):
    question = exam_service.update_question(db, question_id=question_id, question_in=question_in)
    return APIResponse(message="Question updated successfully", data=ExamQuestion.model_validate(question))

@router.delete("/questions/{question_id}", response_model=APIResponse[ExamQuestion])
def delete_exam_question(
    question_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    question = exam_service.delete_question(db, question_id=question_id)
    return APIResponse(message="Question deleted successfully", data=ExamQuestion.model_validate(question))
