import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stickerdiary.common.codes import ErrorCode
from stickerdiary.common.exceptions import AppError, InvalidCredentialError, ValidationFailureError

logger = logging.getLogger(__name__)


def error_body(error_code: ErrorCode, message=None, errors=None) -> dict:
    body = {
        "code": error_code.status,
        "error": error_code.name,
        "message": message or error_code.message,
    }
    if errors:
        body["errors"] = errors
    return body


async def app_error_handler(request: Request, exc: AppError):
    logger.error(f"{type(exc).__name__}: {exc.message}")
    errors = None
    if isinstance(exc, ValidationFailureError):
        errors = [{"field": e.field, "message": e.message} for e in exc.errors]

    headers = None
    if isinstance(exc, InvalidCredentialError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.error_code.status,
        content=error_body(exc.error_code, exc.message, errors),
        headers=headers,
    )


# pydantic 오류 타입 중 형식 불일치에 해당하는 접미사
TYPE_ERROR_SUFFIXES = ("_parsing", "_type")


def validation_error_code(errors) -> ErrorCode:
    types = [err["type"] for err in errors]
    if "json_invalid" in types:
        return ErrorCode.INVALID_REQUEST_BODY
    if all(t == "missing" for t in types):
        return ErrorCode.MISSING_PARAMETER
    if all(t.endswith(TYPE_ERROR_SUFFIXES) for t in types):
        return ErrorCode.INVALID_PARAMETER_TYPE
    return ErrorCode.INVALID_INPUT


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.error(f"RequestValidationError: {exc.errors()}")
    errors = [
        {
            # ("body", "title") → "title"
            "field": ".".join(str(loc) for loc in err["loc"] if loc not in ("body", "query", "path", "header")),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body(validation_error_code(exc.errors()), errors=errors))


async def unexpected_error_handler(request: Request, exc: Exception):
    # 내부 정보는 응답에 노출하지 않는다
    logger.exception(f"Unexpected error occurred: {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body(ErrorCode.INTERNAL_ERROR))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
