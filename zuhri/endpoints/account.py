from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zuhri.core.decorators import cache_endpoint
from zuhri.models.user import User as UserModel
from zuhri.schemas.response import APIResponse
from zuhri.schemas.stats import UserStats
from zuhri.schemas.user import User, ProfileUpdate
from zuhri.services.profile import profile_service
from zuhri.services.stats import stats_service
from zuhri.utils import deps

router = APIRouter()

@router.patch("/profile", response_model=APIResponse[User])
async def update_profile(
    *,
    db: Session = Depends(deps.get_transactional_db),
    profile_in: ProfileUpdate,
    current_user: UserModel = Depends(deps.get_current_user)
):
    user = await profile_service.update_profile(db, user=current_user, profile_in=profile_in)
    return APIResponse(message="Profile updated successfully", data=User.model_validate(user))

@router.get("/dashboard/stats", response_model=APIResponse[UserStats])
@cache_endpoint(ttl=60)
async def get_dashboard_stats(
    db: Session = Depends(deps.get_db),
    current_user: UserModel = Depends(deps.get_current_user)
):
    stats = stats_service.user_stats(db, user=current_user)
    return APIResponse(message="Stats retrieved successfully", data=stats)
