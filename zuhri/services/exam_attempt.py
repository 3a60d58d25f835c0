import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from zuhri.core.cache import cache
from zuhri.core.config import settings
from zuhri.core.constants import ExamAttemptStatusEnum
from zuhri.crud.course import course as crud_course
from zuhri.crud.exam_attempt import exam_attempt as crud_exam_attempt
from zuhri.crud.exam_question import exam_question as crud_exam_question
from zuhri.models.exam import Exam
from zuhri.models.exam_attempt import ExamAttempt
from zuhri.models.user import User
from zuhri.schemas.exam_attempt import AttemptStarted, ExamResult
from zuhri.services.certificate import certificate_service
from zuhri.services.exam import exam_service
from zuhri.services.grading import grade_answers
from zuhri.services.progress import progress_service
from zuhri.utils.dates import utcnow, as_naive_utc

logger = logging.getLogger(__name__)


def attempt_deadline(attempt: ExamAttempt, exam: Exam) -> datetime:
    return as_naive_utc(attempt.started_at) + timedelta(minutes=exam.duration)


def merge_answers(saved: Optional[Dict[str, str]], incoming: Optional[Dict[str, str]]) -> Dict[str, str]:
    merged = {str(key): value for key, value in (saved or {}).items()}
    merged.update({str(key): value for key, value in (incoming or {}).items()})
    return merged


class ExamAttemptService:
    def _get_owned_attempt(self, db: Session, *, user: User, attempt_id: int) -> ExamAttempt:
        attempt = crud_exam_attempt.get(db, id=attempt_id)
        # Other users' attempts are reported as missing rather than forbidden.
        if not attempt or attempt.user_id != user.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam attempt not found.")
        return attempt

    def _started(self, attempt: ExamAttempt, exam: Exam, now: datetime) -> AttemptStarted:
        expires_at = attempt_deadline(attempt, exam)
        return AttemptStarted(
            id=attempt.id,
            exam_id=exam.id,
            started_at=as_naive_utc(attempt.started_at),
            expires_at=expires_at,
            remaining_seconds=max(int((expires_at - now).total_seconds()), 0),
            answers=attempt.answers or {},
        )

    def _finalize(
        self,
        db: Session,
        *,
        attempt: ExamAttempt,
        answers: Dict[str, str],
        final_status: ExamAttemptStatusEnum,
        now: datetime,
    ) -> ExamResult:
        """Grade an in-progress attempt exactly once.

        The status flip is a conditional UPDATE, so two concurrent submits of the
        same attempt cannot both grade it.
        """
        exam = attempt.exam
        outcome = grade_answers(crud_exam_question.get_by_exam(db, exam_id=exam.id), answers, exam.passing_grade)
        started_at = as_naive_utc(attempt.started_at)

        updated = (
            db.query(ExamAttempt)
            .filter(ExamAttempt.id == attempt.id, ExamAttempt.status == ExamAttemptStatusEnum.IN_PROGRESS)
            .update(
                {
                    ExamAttempt.status: final_status,
                    ExamAttempt.answers: answers,
                    ExamAttempt.score: outcome.score,
                    ExamAttempt.correct_answers: outcome.correct_answers,
                    ExamAttempt.total_questions: outcome.total_questions,
                    ExamAttempt.passed: outcome.passed,
                    ExamAttempt.completed_at: now,
                    ExamAttempt.duration: max(int((now - started_at).total_seconds()), 0),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This exam attempt has already been submitted.")
        db.refresh(attempt)

        certificate_id = None
        if outcome.passed:
            certificate = certificate_service.issue_for_attempt(
                db, attempt=attempt, user=attempt.user, course=crud_course.get_any(db, id=attempt.course_id)
            )
            certificate_id = certificate.id
        db.commit()

        logger.info(
            f"Attempt {attempt.id} graded ({final_status.value}): score={outcome.score} "
            f"passed={outcome.passed} user={attempt.user_id}"
        )
        return ExamResult(
            attempt_id=attempt.id,
            score=outcome.score,
            correct_answers=outcome.correct_answers,
            total_questions=outcome.total_questions,
            passed=outcome.passed,
            certificate_id=certificate_id,
            redirect_after_seconds=settings.EXAM_RESULT_REDIRECT_SECONDS,
        )

    def _is_overdue(self, attempt: ExamAttempt, now: datetime) -> bool:
        grace = timedelta(seconds=settings.ATTEMPT_EXPIRY_GRACE_SECONDS)
        return now > attempt_deadline(attempt, attempt.exam) + grace

    async def start(self, db: Session, *, user: User, exam_id: int) -> AttemptStarted:
        exam = exam_service.get_active_exam(db, exam_id)
        progress_service.lesson_gate(db, user=user, course_id=exam.course_id)

        now = utcnow()
        existing = crud_exam_attempt.get_in_progress(db, user_id=user.id, exam_id=exam.id)
        if existing:
            if now < attempt_deadline(existing, exam):
                logger.info(f"Resuming attempt {existing.id} for user {user.id}")
                return self._started(existing, exam, now)
            # Ran out of time without submitting; grade what was saved before starting over.
            self._finalize(
                db, attempt=existing, answers=existing.answers or {},
                final_status=ExamAttemptStatusEnum.EXPIRED, now=now,
            )

        attempt = crud_exam_attempt.create(
            db,
            obj_in={
                "user_id": user.id,
                "exam_id": exam.id,
                "course_id": exam.course_id,
                "answers": {},
                "total_questions": exam.total_questions,
                "status": ExamAttemptStatusEnum.IN_PROGRESS,
                "started_at": now,
            },
        )
        await cache.invalidate_user_cache(user.id)
        logger.info(f"User {user.id} started attempt {attempt.id} on exam {exam.id}")
        return self._started(attempt, exam, now)

    def save_answers(self, db: Session, *, user: User, attempt_id: int, answers: Dict[str, str]) -> AttemptStarted:
        attempt = self._get_owned_attempt(db, user=user, attempt_id=attempt_id)
        if attempt.status != ExamAttemptStatusEnum.IN_PROGRESS:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This exam attempt is no longer in progress.")
        attempt = crud_exam_attempt.update(
            db, db_obj=attempt, obj_in={"answers": merge_answers(attempt.answers, answers)}
        )
        return self._started(attempt, attempt.exam, utcnow())

    async def submit(self, db: Session, *, user: User, attempt_id: int, answers: Dict[str, str]) -> ExamResult:
        attempt = self._get_owned_attempt(db, user=user, attempt_id=attempt_id)
        if attempt.status != ExamAttemptStatusEnum.IN_PROGRESS:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This exam attempt has already been submitted.")

        now = utcnow()
        if self._is_overdue(attempt, now):
            # Late submissions only count what was saved before the deadline.
            result = self._finalize(
                db, attempt=attempt, answers=attempt.answers or {},
                final_status=ExamAttemptStatusEnum.EXPIRED, now=now,
            )
        else:
            result = self._finalize(
                db, attempt=attempt, answers=merge_answers(attempt.answers, answers),
                final_status=ExamAttemptStatusEnum.COMPLETED, now=now,
            )
        await cache.invalidate_user_cache(user.id)
        return result

    def get_attempt(self, db: Session, *, user: User, attempt_id: int) -> ExamAttempt:
        return self._get_owned_attempt(db, user=user, attempt_id=attempt_id)

    def list_for_exam(self, db: Session, *, user: User, exam_id: int) -> List[ExamAttempt]:
        exam = exam_service.get_exam_for_admin(db, exam_id)
        return crud_exam_attempt.get_by_user_and_exam(db, user_id=user.id, exam_id=exam.id)

    async def expire_overdue_attempts(self, db: Session) -> int:
        now = utcnow()
        expired = 0
        for attempt in crud_exam_attempt.get_all_in_progress(db):
            if not self._is_overdue(attempt, now):
                continue
            try:
                self._finalize(
                    db, attempt=attempt, answers=attempt.answers or {},
                    final_status=ExamAttemptStatusEnum.EXPIRED, now=now,
                )
            except HTTPException:
                # Submitted by its owner between the query and the update.
                continue
            await cache.invalidate_user_cache(attempt.user_id)
            expired += 1
        return expired

exam_attempt_service = ExamAttemptService()
