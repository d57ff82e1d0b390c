import bcrypt
import jwt
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional
from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session
from stickerdiary.common.codes import ErrorCode
from stickerdiary.common.exceptions import FieldError, InvalidCredentialError, ValidationFailureError
from stickerdiary.database import get_db
from stickerdiary.user.models import User
from stickerdiary.user.schemas import PASSWORD_MAX_BYTES

load_dotenv()

logger = logging.getLogger(__name__)

# 환경 변수 설정
SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))  # 1시간
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 14))  # 2주

GRANT_TYPE = "Bearer"
ACCESS = "access"
REFRESH = "refresh"

# Authorization 헤더 ("Bearer <token>" 또는 토큰 그대로)
auth_header = APIKeyHeader(name="Authorization", auto_error=False)


class TokenPair(NamedTuple):
    access_token: str
    refresh_token: str
    token_type: str = GRANT_TYPE


# 비밀번호 해싱
def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > PASSWORD_MAX_BYTES:
        raise ValidationFailureError([FieldError("password", f"비밀번호는 {PASSWORD_MAX_BYTES}바이트를 넘을 수 없습니다.")])
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")

# 비밀번호 검증
def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # 저장된 해시 형식이 잘못된 경우
        logger.warning("잘못된 형식의 비밀번호 해시")
        return False


def authority_of(role) -> str:
    return f"ROLE_{getattr(role, 'value', role)}"


def _create_token(identity: str, role, token_type: str, expires_delta: timedelta) -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": identity,
        "auth": authority_of(role),
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

# 액세스 토큰 생성
def create_access_token(identity: str, role, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(identity, role, ACCESS, expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

# 리프레시 토큰 생성
def create_refresh_token(identity: str, role, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(identity, role, REFRESH, expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def issue_tokens(identity: str, role) -> TokenPair:
    """
    access/refresh 토큰 한 쌍을 발급한다. 서버에는 아무것도 저장하지 않는다.
    """
    return TokenPair(
        access_token=create_access_token(identity, role),
        refresh_token=create_refresh_token(identity, role),
    )


def decode_token(token: str, token_type: Optional[str] = None) -> dict:
    """
    토큰을 검증하고 payload를 반환한다. 실패하면 InvalidCredentialError.
    token_type이 주어지면 access/refresh 구분도 확인한다.
    """
    if not token:
        raise InvalidCredentialError(error_code=ErrorCode.INVALID_TOKEN)
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"require": ["sub", "exp"]})
    except jwt.ExpiredSignatureError:
        raise InvalidCredentialError("토큰이 만료되었습니다.", error_code=ErrorCode.INVALID_TOKEN)
    except jwt.PyJWTError:
        raise InvalidCredentialError(error_code=ErrorCode.INVALID_TOKEN)

    if token_type is not None and payload.get("type") != token_type:
        raise InvalidCredentialError(error_code=ErrorCode.INVALID_TOKEN)
    return payload


def validate_token(token: str, token_type: Optional[str] = None) -> bool:
    try:
        decode_token(token, token_type)
        return True
    except InvalidCredentialError as e:
        logger.info(f"토큰 검증 실패: {e.message}")
        return False


def get_identity(token: str) -> str:
    return decode_token(token)["sub"]


def strip_bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip()
    return authorization


# 현재 로그인된 사용자 가져오기
def get_current_user(authorization: Optional[str] = Depends(auth_header), db: Session = Depends(get_db)) -> User:
    token = strip_bearer(authorization)
    if not token:
        raise InvalidCredentialError(error_code=ErrorCode.UNAUTHORIZED)

    payload = decode_token(token, ACCESS)

    db_user = db.query(User).filter(User.email == payload["sub"]).first()
    if db_user is None:
        logger.warning(f"토큰의 사용자가 존재하지 않음: {payload['sub']}")
        raise InvalidCredentialError(error_code=ErrorCode.INVALID_TOKEN)

    return db_user
