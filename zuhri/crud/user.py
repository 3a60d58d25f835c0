from typing import Optional
from sqlalchemy.orm import Session

from zuhri.core.security import get_password_hash
from zuhri.crud.base import CRUDBase
from zuhri.models.user import User
from zuhri.schemas.user import UserCreate, ProfileUpdate

class CRUDUser(CRUDBase[User, UserCreate, ProfileUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def create_with_password(self, db: Session, *, obj_in: UserCreate, **extra) -> User:
        data = obj_in.model_dump(exclude={"password"})
        data["email"] = data["email"].lower()
        data["hashed_password"] = get_password_hash(obj_in.password)
        return self.create(db, obj_in=data, **extra)

    def count(self, db: Session) -> int:
        return db.query(User).count()

user = CRUDUser(User)
