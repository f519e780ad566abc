"""Uniform result envelope returned by every service operation."""

from typing import Generic, TypeVar

from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

from app.core.exceptions import STATUS_BY_CODE, AppError

T = TypeVar("T")


class ActionResult(BaseModel, Generic[T]):
    success: bool
    message: str
    data: T | None = None
    code: str | None = None  # error code on failure, e.g. NOT_FOUND


def ok(message: str, data: T | None = None) -> ActionResult[T]:
    return ActionResult(success=True, message=message, data=data)


def fail(message: str, code: str = "ERROR") -> ActionResult:
    return ActionResult(success=False, message=message, code=code)


def from_error(exc: AppError) -> ActionResult:
    """Failure envelope carrying the error's own message and code."""
    return fail(exc.message, exc.code)


def to_response(result: ActionResult) -> ORJSONResponse:
    """Serialise the envelope; HTTP status follows the failure code."""
    status_code = 200 if result.success else STATUS_BY_CODE.get(result.code, 500)
    return ORJSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
