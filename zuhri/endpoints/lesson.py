from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zuhri.models.user import User
from zuhri.schemas.lesson_progress import LessonProgress, LessonProgressReport
from zuhri.schemas.response import APIResponse
from zuhri.services.progress import progress_service
from zuhri.utils import deps

router = APIRouter()

@router.post("/lessons/{lesson_id}/progress", response_model=APIResponse[LessonProgress])
async def report_lesson_progress(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    report: LessonProgressReport,
    current_user: User = Depends(deps.get_current_user)
):
    record = await progress_service.report_progress(db, user=current_user, lesson_id=lesson_id, report=report)
    return APIResponse(message="Progress saved", data=LessonProgress.model_validate(record))
