"""
全局异常处理
业务异常映射为 {code, message, timestamp}；未知异常只记录日志，不向调用方暴露细节
"""
import logging
from datetime import datetime, UTC

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_reviews.exceptions import (
    ReviewServiceError, ResourceNotFoundError, DuplicateReviewError,
    FeatureDisabledError, InvalidReviewError
)
from hotel_reviews.models.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, timestamp=datetime.now(UTC).replace(tzinfo=None))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def feature_disabled_handler(_request: Request, exc: FeatureDisabledError) -> JSONResponse:
    logger.warning(f"Feature disabled ({exc.scope}): {exc.message}")
    return error_response(403, exc.code, exc.message)


async def not_found_handler(_request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    logger.warning(f"Resource not found: {exc.message}")
    return error_response(404, exc.code, exc.message)


async def duplicate_review_handler(_request: Request, exc: DuplicateReviewError) -> JSONResponse:
    logger.warning(f"Duplicate review: {exc.message}")
    return error_response(409, exc.code, exc.message)


async def invalid_review_handler(_request: Request, exc: InvalidReviewError) -> JSONResponse:
    logger.warning(f"Invalid review: {exc.message}")
    return error_response(400, exc.code, exc.message)


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    logger.warning(f"Validation error: {messages}")
    return error_response(400, "VALIDATION_ERROR", "Validation failed: " + ", ".join(messages))


async def review_service_error_handler(_request: Request, exc: ReviewServiceError) -> JSONResponse:
    logger.error(f"Unhandled review service error: {exc.message}")
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


async def unexpected_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error occurred", exc_info=exc)
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app) -> None:
    """注册异常处理器"""
    app.add_exception_handler(FeatureDisabledError, feature_disabled_handler)
    app.add_exception_handler(ResourceNotFoundError, not_found_handler)
    app.add_exception_handler(DuplicateReviewError, duplicate_review_handler)
    app.add_exception_handler(InvalidReviewError, invalid_review_handler)
    app.add_exception_handler(ReviewServiceError, review_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
