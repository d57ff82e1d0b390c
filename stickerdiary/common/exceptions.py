from dataclasses import dataclass
from typing import List, Optional

from stickerdiary.common.codes import ErrorCode


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class AppError(Exception):
    """
    도메인 예외의 공통 부모. 경계(handlers.py)에서 error_code로 HTTP 응답을 만든다.
    """
    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: Optional[str] = None, error_code: Optional[ErrorCode] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message or self.error_code.message
        super().__init__(self.message)


class NotFoundError(AppError):
    pass


class UserNotFoundError(NotFoundError):
    error_code = ErrorCode.USER_NOT_FOUND

    def __init__(self, user_id=None, message: Optional[str] = None):
        if message is None and user_id is not None:
            message = f"사용자를 찾을 수 없습니다. ID: {user_id}"
        super().__init__(message)


class DiaryNotFoundError(NotFoundError):
    error_code = ErrorCode.DIARY_NOT_FOUND

    def __init__(self, diary_id=None, message: Optional[str] = None):
        if message is None and diary_id is not None:
            message = f"다이어리를 찾을 수 없습니다. ID: {diary_id}"
        super().__init__(message)


class StickerNotFoundError(NotFoundError):
    error_code = ErrorCode.STICKER_NOT_FOUND


class DuplicateEmailError(AppError):
    error_code = ErrorCode.DUPLICATE_EMAIL

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"이미 사용 중인 이메일입니다: {email}")


class InvalidCredentialError(AppError):
    error_code = ErrorCode.INVALID_CREDENTIALS


class ValidationFailureError(AppError):
    error_code = ErrorCode.INVALID_INPUT

    def __init__(self, errors: List[FieldError], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message)


class UnexpectedError(AppError):
    error_code = ErrorCode.INTERNAL_ERROR
