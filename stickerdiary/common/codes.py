from enum import Enum


class ErrorCode(Enum):
    # 400 Bad Request
    INVALID_INPUT = (400, "입력값이 올바르지 않습니다.")
    MISSING_PARAMETER = (400, "필수 파라미터가 누락되었습니다.")
    INVALID_PARAMETER_TYPE = (400, "파라미터 형식이 올바르지 않습니다.")
    INVALID_REQUEST_BODY = (400, "요청 본문을 읽을 수 없습니다.")

    # 401 Unauthorized
    UNAUTHORIZED = (401, "인증이 필요합니다.")
    INVALID_CREDENTIALS = (401, "이메일 또는 비밀번호가 일치하지 않습니다.")
    INVALID_TOKEN = (401, "유효하지 않은 토큰입니다.")

    # 404 Not Found
    USER_NOT_FOUND = (404, "사용자를 찾을 수 없습니다.")
    DIARY_NOT_FOUND = (404, "다이어리를 찾을 수 없습니다.")
    STICKER_NOT_FOUND = (404, "스티커를 찾을 수 없습니다.")

    # 409 Conflict
    DUPLICATE_EMAIL = (409, "이미 사용 중인 이메일입니다.")

    # 500 Internal Server Error
    INTERNAL_ERROR = (500, "서버 내부 오류가 발생했습니다.")

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
