from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from stickerdiary.common.codes import ErrorCode
from stickerdiary.common.exceptions import InvalidCredentialError
from stickerdiary.database import get_db
from stickerdiary.user import service
from stickerdiary.user.auth import auth_header, get_current_user, strip_bearer
from stickerdiary.user.models import User
from stickerdiary.user.schemas import (
    SignUpRequest, LoginRequest, LoginResponse, TokenResponse, UserResponse, UserUpdateRequest
)

auth_router = APIRouter()
router = APIRouter()


@auth_router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED, summary="회원가입",
                  description="이메일, 비밀번호, 닉네임으로 회원가입을 진행합니다.")
def sign_up(request: SignUpRequest, db: Session = Depends(get_db)):
    return service.sign_up(db, request)


@auth_router.post("/login", response_model=LoginResponse, summary="로그인",
                  description="이메일, 비밀번호로 로그인하여 access/refresh 토큰을 발급합니다.")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    result = service.login(db, request)
    return LoginResponse(
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
        token_type=result.tokens.token_type,
        user=UserResponse.model_validate(result.user),
    )


@auth_router.post("/refresh", response_model=TokenResponse, summary="토큰 재발급",
                  description="Authorization 헤더의 리프레시 토큰으로 access/refresh 토큰을 재발급합니다.")
def refresh_token(authorization: Optional[str] = Depends(auth_header), db: Session = Depends(get_db)):
    token = strip_bearer(authorization)
    if not token:
        raise InvalidCredentialError(error_code=ErrorCode.UNAUTHORIZED)
    tokens = service.refresh_token(db, token)
    return TokenResponse(**tokens._asdict())


@router.get("/me", response_model=UserResponse, summary="내 정보 조회", description="현재 로그인된 사용자 정보 조회")
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserResponse, summary="내 정보 수정",
            description="닉네임/자기소개/프로필 이미지 중 전달된 값만 수정합니다.")
def update_me(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.update_profile(db, current_user.id, request)


@router.post("/me/onboarding/complete", response_model=UserResponse, summary="온보딩 완료",
             description="온보딩 완료 상태로 변경합니다. 이미 완료된 경우에도 성공합니다.")
def complete_onboarding(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.complete_onboarding(db, current_user.id)


@router.get("/{user_id}", response_model=UserResponse, summary="사용자 조회", description="ID로 사용자 정보를 조회합니다.")
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.get_user_by_id(db, user_id)
