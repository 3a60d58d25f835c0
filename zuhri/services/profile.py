import logging
from sqlalchemy.orm import Session

from zuhri.core.cache import cache
from zuhri.crud.user import user as crud_user
from zuhri.models.user import User
from zuhri.schemas.user import ProfileUpdate

logger = logging.getLogger(__name__)

class ProfileService:
    async def update_profile(self, db: Session, *, user: User, profile_in: ProfileUpdate) -> User:
        user = crud_user.update(db, db_obj=user, obj_in=profile_in)
        await cache.invalidate_user_cache(user.id)
        logger.info(f"Profile updated for user {user.id}")
        return user

profile_service = ProfileService()
