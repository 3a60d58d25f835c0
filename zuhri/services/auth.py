import logging
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from jose import JWTError

from zuhri.core.security import verify_password, create_access_token, decode_access_token
from zuhri.crud.user import user as crud_user
from zuhri.crud.token_denylist import token_denylist as crud_token_denylist
from zuhri.models.user import User
from zuhri.schemas.token import Token, TokenPayload
from zuhri.schemas.user import UserCreate, AuthResult

logger = logging.getLogger(__name__)

class AuthService:
    def _issue_token(self, user: User) -> Token:
        access_token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
        return Token(access_token=access_token, token_type="bearer")

    def register(self, db: Session, *, user_in: UserCreate) -> AuthResult:
        if crud_user.get_by_email(db, email=user_in.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A user with this email already exists.",
            )
        user = crud_user.create_with_password(db, obj_in=user_in)
        logger.info(f"Registered user {user.id}")
        return AuthResult(user=user, token=self._issue_token(user))

    def login(self, db: Session, *, email: str, password: str) -> AuthResult:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )
        return AuthResult(user=user, token=self._issue_token(user))

    def logout(self, db: Session, *, token: str) -> None:
        try:
            token_data = TokenPayload(**decode_access_token(token))
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        if not token_data.jti or not token_data.exp:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token missing JTI or expiration claim")

        if not crud_token_denylist.get_by_jti(db, jti=token_data.jti):
            crud_token_denylist.create(db, obj_in={"jti": token_data.jti, "exp": datetime.fromtimestamp(token_data.exp, tz=timezone.utc)})

auth_service = AuthService()
