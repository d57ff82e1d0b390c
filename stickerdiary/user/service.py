import logging
from typing import NamedTuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stickerdiary.common.codes import ErrorCode
from stickerdiary.common.exceptions import DuplicateEmailError, InvalidCredentialError, UserNotFoundError
from stickerdiary.transaction import transactional_session
from stickerdiary.user.auth import REFRESH, TokenPair, decode_token, hash_password, issue_tokens, verify_password
from stickerdiary.user.models import Role, User
from stickerdiary.user.schemas import LoginRequest, SignUpRequest, UserUpdateRequest

logger = logging.getLogger(__name__)


class LoginResult(NamedTuple):
    user: User
    tokens: TokenPair


def get_user_by_id(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def get_user_by_email(db: Session, email: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise UserNotFoundError(message="사용자를 찾을 수 없습니다.")
    return user


def sign_up(db: Session, request: SignUpRequest) -> User:
    with transactional_session(db) as session:
        # 빠른 실패용 확인일 뿐이고, 실제 보장은 email 컬럼의 unique 제약이다
        if session.query(User.id).filter(User.email == request.email).first():
            raise DuplicateEmailError(request.email)

        user = User(
            email=request.email,
            password=hash_password(request.password),
            nickname=request.nickname,
            role=Role.USER,
        )
        session.add(user)
        try:
            session.flush()
        except IntegrityError as e:
            raise DuplicateEmailError(request.email) from e

    db.refresh(user)
    logger.info(f"회원가입 완료: user_id={user.id}, email={user.email}")
    return user


def login(db: Session, request: LoginRequest) -> LoginResult:
    user = db.query(User).filter(User.email == request.email).first()
    # 계정 존재 여부가 드러나지 않도록 두 경우 모두 같은 에러로 응답한다
    if user is None:
        logger.warning(f"로그인 실패 - 존재하지 않는 이메일: {request.email}")
        raise InvalidCredentialError()
    if not verify_password(request.password, user.password):
        logger.warning(f"로그인 실패 - 비밀번호 불일치: user_id={user.id}")
        raise InvalidCredentialError()

    tokens = issue_tokens(user.email, user.role)
    logger.info(f"로그인 성공: user_id={user.id}")
    return LoginResult(user=user, tokens=tokens)


def refresh_token(db: Session, token: str) -> TokenPair:
    """
    리프레시 토큰을 다시 검증하고 새 토큰 쌍을 발급한다.
    권한은 토큰 클레임이 아니라 현재 DB의 role 기준이다.
    """
    payload = decode_token(token, REFRESH)
    user = db.query(User).filter(User.email == payload["sub"]).first()
    if user is None:
        logger.warning(f"리프레시 실패 - 사용자 없음: {payload['sub']}")
        raise InvalidCredentialError("유효하지 않은 리프레시 토큰입니다.", error_code=ErrorCode.INVALID_TOKEN)
    return issue_tokens(user.email, user.role)


def update_profile(db: Session, user_id: int, request: UserUpdateRequest) -> User:
    with transactional_session(db) as session:
        user = get_user_by_id(session, user_id)
        # 값이 들어온 필드만 반영한다
        if request.nickname is not None:
            user.nickname = request.nickname
        if request.bio is not None:
            user.bio = request.bio
        if request.avatar_url is not None:
            user.avatar_url = request.avatar_url

    db.refresh(user)
    return user


def complete_onboarding(db: Session, user_id: int) -> User:
    with transactional_session(db) as session:
        user = get_user_by_id(session, user_id)
        if not user.onboarding_completed:
            user.onboarding_completed = True
            logger.info(f"온보딩 완료: user_id={user_id}")

    db.refresh(user)
    return user
