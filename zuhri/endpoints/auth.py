from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from zuhri.core.config import settings
from zuhri.schemas.response import APIResponse
from zuhri.schemas.token import LoginRequest
from zuhri.schemas.user import User, UserCreate, AuthResult
from zuhri.services.auth import auth_service
from zuhri.utils import deps

router = APIRouter()

def _set_session_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key=deps.ACCESS_TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        samesite="lax",
        secure=not settings.TESTING,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

@router.post("/register", response_model=APIResponse[AuthResult], status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate,
    response: Response
):
    result = auth_service.register(db, user_in=user_in)
    _set_session_cookie(response, result.token.access_token)
    return APIResponse(message="Registration successful", data=result)

@router.post("/login", response_model=APIResponse[AuthResult])
def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(deps.get_db)
):
    result = auth_service.login(db, email=request.email, password=request.password)
    _set_session_cookie(response, result.token.access_token)
    return APIResponse(message="Login successful", data=result)

@router.post("/logout", response_model=APIResponse[None])
def logout(
    response: Response,
    db: Session = Depends(deps.get_transactional_db),
    token: str = Depends(deps.get_token)
):
    auth_service.logout(db, token=token)
    response.delete_cookie(deps.ACCESS_TOKEN_COOKIE)
    return APIResponse(message="Successfully logged out")

@router.get("/user", response_model=APIResponse[User])
def read_current_user(current_user=Depends(deps.get_current_user)):
    return APIResponse(message="User retrieved successfully", data=User.model_validate(current_user))
