from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from zuhri.core.constants import RoleEnum
from zuhri.core.database import SessionLocal
from zuhri.core.security import decode_access_token
from zuhri.crud.user import user as user_crud
from zuhri.crud.token_denylist import token_denylist as token_denylist_crud
from zuhri.models.user import User
from zuhri.schemas.token import TokenPayload

ACCESS_TOKEN_COOKIE = "access_token"

http_bearer = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> str:
    """Bearer header first, then the session cookie set by browser logins."""
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: str = Depends(get_token),
) -> User:
    try:
        token_data = TokenPayload(**decode_access_token(token))
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    if token_data.jti and token_denylist_crud.get_by_jti(db, jti=token_data.jti):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has been revoked")

    if not token_data.sub or not token_data.sub.isdigit():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = user_crud.get(db, id=int(token_data.sub))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    request.state.user_id = user.id
    return user

def require_role(*roles: RoleEnum):
    """Dependency that only lets users holding one of ``roles`` through."""
    def _verify_role(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action."
            )
        return current_user
    return _verify_role

get_current_admin = require_role(RoleEnum.ADMIN)
