from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from zuhri.core.decorators import cache_endpoint
from zuhri.models.user import User
from zuhri.schemas.course import Course
from zuhri.schemas.enrollment import Enrollment, EnrollmentWithCourse
from zuhri.schemas.exam import ExamWithQuestions
from zuhri.schemas.lesson import Lesson
from zuhri.schemas.lesson_progress import CourseProgress
from zuhri.schemas.response import APIResponse
from zuhri.services.course import course_service
from zuhri.services.exam import exam_service
from zuhri.services.progress import progress_service
from zuhri.utils import deps

router = APIRouter()

@router.get("/courses", response_model=APIResponse[List[Course]])
@cache_endpoint(ttl=300)
async def list_courses(
    request: Request,
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    courses = course_service.list_courses(db, skip=skip, limit=limit)
    return APIResponse(message="Courses retrieved successfully", data=[Course.model_validate(c) for c in courses])

@router.get("/courses/{course_id}", response_model=APIResponse[Course])
@cache_endpoint(ttl=300)
async def get_course(
    request: Request,
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    course = course_service.get_course(db, course_id)
    return APIResponse(message="Course retrieved successfully", data=Course.model_validate(course))

@router.get("/courses/{course_id}/lessons", response_model=APIResponse[List[Lesson]])
@cache_endpoint(ttl=300)
async def list_course_lessons(
    request: Request,
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    lessons = course_service.list_lessons(db, course_id)
    return APIResponse(message="Lessons retrieved successfully", data=[Lesson.model_validate(l) for l in lessons])

@router.post("/courses/{course_id}/enroll", response_model=APIResponse[Enrollment], status_code=status.HTTP_201_CREATED)
async def enroll_in_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    current_user: User = Depends(deps.get_current_user)
):
    enrollment = await progress_service.enroll(db, user=current_user, course_id=course_id)
    return APIResponse(message="Enrolled successfully", data=Enrollment.model_validate(enrollment))

@router.get("/my-enrollments", response_model=APIResponse[List[EnrollmentWithCourse]])
def list_my_enrollments(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    enrollments = progress_service.list_enrollments(db, user=current_user)
    return APIResponse(
        message="Enrollments retrieved successfully",
        data=[EnrollmentWithCourse.model_validate(e) for e in enrollments]
    )

@router.get("/courses/{course_id}/progress", response_model=APIResponse[CourseProgress])
def get_course_progress(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    progress = progress_service.get_course_progress(db, user=current_user, course_id=course_id)
    return APIResponse(message="Course progress retrieved successfully", data=progress)

@router.get("/courses/{course_id}/exam", response_model=APIResponse[ExamWithQuestions])
def get_course_exam(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    exam = exam_service.get_course_exam(db, user=current_user, course_id=course_id)
    return APIResponse(message="Exam retrieved successfully", data=exam)
