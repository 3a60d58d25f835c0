import logging
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from zuhri.core.cache import cache
from zuhri.core.config import settings
from zuhri.crud.course import course as crud_course
from zuhri.crud.enrollment import enrollment as crud_enrollment
from zuhri.crud.lesson import lesson as crud_lesson
from zuhri.crud.lesson_progress import lesson_progress as crud_lesson_progress
from zuhri.models.enrollment import Enrollment
from zuhri.models.lesson_progress import LessonProgress
from zuhri.models.user import User
from zuhri.schemas.lesson_progress import LessonProgressReport, CourseProgress
from zuhri.services.grading import round_percentage
from zuhri.utils.dates import utcnow

logger = logging.getLogger(__name__)


def reaches_completion(watched_seconds: int, lesson_seconds, client_flag: bool = False) -> bool:
    """Whether a watched position counts as completing the lesson.

    Lessons without a known length fall back to the player's own flag.
    """
    if not lesson_seconds:
        return bool(client_flag)
    return watched_seconds >= settings.LESSON_COMPLETION_RATIO * lesson_seconds


class ProgressService:
    async def enroll(self, db: Session, *, user: User, course_id: int) -> Enrollment:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        if crud_enrollment.get_by_user_and_course(db, user_id=user.id, course_id=course_id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course.")

        try:
            enrollment = crud_enrollment.create(
                db, obj_in={"user_id": user.id, "course_id": course_id, "progress": 0.0}
            )
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course.")

        await cache.invalidate_user_cache(user.id)
        logger.info(f"User {user.id} enrolled in course {course_id}")
        return enrollment

    def list_enrollments(self, db: Session, *, user: User) -> List[Enrollment]:
        return crud_enrollment.get_by_user(db, user_id=user.id)

    def _recalculate_enrollment(self, db: Session, enrollment: Enrollment) -> Enrollment:
        total = crud_lesson.count_active_by_course(db, course_id=enrollment.course_id)
        completed = crud_lesson_progress.count_completed_active_lessons(
            db, user_id=enrollment.user_id, course_id=enrollment.course_id
        )
        progress = round_percentage(min(completed / total * 100, 100.0)) if total else 0.0
        enrollment.progress = progress
        if progress >= 100 and enrollment.completed_at is None:
            enrollment.completed_at = utcnow()
            logger.info(f"User {enrollment.user_id} completed course {enrollment.course_id}")
        db.add(enrollment)
        db.flush()
        return enrollment

    async def report_progress(
        self, db: Session, *, user: User, lesson_id: int, report: LessonProgressReport
    ) -> LessonProgress:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")

        if report.course_id is not None and report.course_id != lesson.course_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Lesson does not belong to the given course.",
            )

        enrollment = crud_enrollment.get_by_user_and_course(db, user_id=user.id, course_id=lesson.course_id)
        if not enrollment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="You are not enrolled in this course.")

        incoming = report.watched_duration
        if lesson.duration:
            incoming = min(incoming, lesson.duration)

        now = utcnow()
        record = crud_lesson_progress.get_by_user_and_lesson(db, user_id=user.id, lesson_id=lesson.id)
        if record is None:
            record = LessonProgress(
                user_id=user.id,
                lesson_id=lesson.id,
                course_id=lesson.course_id,
                watched_duration=0,
                is_completed=False,
            )

        was_completed = bool(record.is_completed)
        record.watched_duration = max(record.watched_duration or 0, incoming)
        record.last_watched_at = now
        if not was_completed and reaches_completion(record.watched_duration, lesson.duration, report.is_completed):
            record.is_completed = True
            record.completed_at = now

        db.add(record)
        db.flush()

        if record.is_completed and not was_completed:
            logger.info(f"User {user.id} completed lesson {lesson.id}")
            self._recalculate_enrollment(db, enrollment)

        db.commit()
        db.refresh(record)
        await cache.invalidate_user_cache(user.id)
        return record

    def get_course_progress(self, db: Session, *, user: User, course_id: int) -> CourseProgress:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        enrollment = crud_enrollment.get_by_user_and_course(db, user_id=user.id, course_id=course_id)
        records = crud_lesson_progress.get_by_user_and_course(db, user_id=user.id, course_id=course_id)
        return CourseProgress(
            enrollment=enrollment,
            progress=enrollment.progress if enrollment else 0.0,
            completed_lessons=crud_lesson_progress.count_completed_active_lessons(
                db, user_id=user.id, course_id=course_id
            ),
            total_lessons=crud_lesson.count_active_by_course(db, course_id=course_id),
            lessons=records,
        )

    def lesson_gate(self, db: Session, *, user: User, course_id: int) -> None:
        """Raise ACCESS DENIED unless every active lesson of the course is completed."""
        required = crud_lesson.count_active_by_course(db, course_id=course_id)
        completed = crud_lesson_progress.count_completed_active_lessons(db, user_id=user.id, course_id=course_id)
        if completed < required:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "message": "You must complete all lessons before taking the exam",
                    "required": required,
                    "completed": completed,
                },
            )

progress_service = ProgressService()
