"""Translate domain errors to HTTP responses and bound service calls by a deadline."""

import asyncio
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from domain.model.errors import (
    DomainError,
    DuplicateError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    OperationTimeoutError,
    OTPRejectedError,
    SigningError,
    StoreError,
)
from port.otp_verifier import OTPAdapterError, OTPTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# First match wins, so subclasses come before their bases
_STATUS_MAP: list[tuple[type[Exception], int]] = [
    (DuplicateError, status.HTTP_409_CONFLICT),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (InvalidTokenError, status.HTTP_401_UNAUTHORIZED),
    (OTPRejectedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (OperationTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (OTPTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (OTPAdapterError, status.HTTP_502_BAD_GATEWAY),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _detail(error: Exception) -> str:
    """Message shown to the caller. Infrastructure failures stay generic."""
    if isinstance(error, StoreError):
        return "Service temporarily unavailable"
    if isinstance(error, OTPAdapterError) and not isinstance(error, OTPTimeoutError):
        return "Verification service unavailable"
    return str(error)


def to_http_exception(error: Exception) -> HTTPException:
    """Map a domain or port error to an HTTPException."""
    for error_type, status_code in _STATUS_MAP:
        if isinstance(error, error_type):
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            return HTTPException(status_code=status_code, detail=_detail(error), headers=headers)

    if isinstance(error, (HashingError, SigningError)):
        logger.error("Credential processing failed", extra={"errorType": type(error).__name__})
    else:
        logger.error("Unmapped error", extra={"errorType": type(error).__name__, "error": str(error)})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


async def run_with_deadline(func: Callable[..., T], *args: Any, timeout: float, **kwargs: Any) -> T:
    """Run a blocking service call in a worker thread, bounded by ``timeout`` seconds.

    Domain and OTP errors are re-raised as HTTPException. A call still running
    at the deadline is abandoned, not rolled back.
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout)
    except asyncio.TimeoutError:
        logger.warning("Request deadline exceeded", extra={"operation": getattr(func, "__name__", repr(func)), "timeout": timeout})
        raise to_http_exception(OperationTimeoutError("Request timed out")) from None
    except (DomainError, OTPAdapterError) as e:
        raise to_http_exception(e) from e
