from sqlalchemy.orm import Session

from zuhri.crud.certificate import certificate as crud_certificate
from zuhri.crud.course import course as crud_course
from zuhri.crud.enrollment import enrollment as crud_enrollment
from zuhri.crud.exam import exam as crud_exam
from zuhri.crud.exam_attempt import exam_attempt as crud_exam_attempt
from zuhri.crud.lesson_progress import lesson_progress as crud_lesson_progress
from zuhri.crud.user import user as crud_user
from zuhri.models.user import User
from zuhri.schemas.stats import UserStats, AdminStats
from zuhri.services.grading import round_half_up

class StatsService:
    def user_stats(self, db: Session, *, user: User) -> UserStats:
        seconds = crud_lesson_progress.sum_completed_lesson_seconds(db, user_id=user.id)
        return UserStats(
            completed_courses=crud_enrollment.count_completed_by_user(db, user_id=user.id),
            certificates=crud_certificate.count_valid_by_user(db, user_id=user.id),
            total_hours=int(round_half_up(seconds / 3600)),
            average_grade=int(round_half_up(crud_exam_attempt.get_user_average_passed_score(db, user_id=user.id))),
        )

    def admin_stats(self, db: Session) -> AdminStats:
        return AdminStats(
            total_users=crud_user.count(db),
            total_courses=crud_course.count_active(db),
            total_exams=crud_exam.count_active(db),
            total_enrollments=crud_enrollment.count(db),
        )

stats_service = StatsService()
