"""Typed errors for the function listing and their classification.

Failures are classified from the botocore exception type and the service
error code, never from the human-readable message.
"""

from __future__ import annotations

from enum import Enum

from botocore.exceptions import (
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
    SSOTokenLoadError,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)

__all__ = [
    "ErrorKind",
    "FunctionListError",
    "PageLimitExceeded",
    "classify_error",
]

_SESSION_EXPIRED_CODES = frozenset(
    {
        "ExpiredToken",
        "ExpiredTokenException",
        "RequestExpired",
    }
)
_NO_CREDENTIALS_CODES = frozenset(
    {
        "UnrecognizedClientException",
        "InvalidClientTokenId",
        "InvalidSignatureException",
        "SignatureDoesNotMatch",
        "AccessDeniedException",
        "AccessDenied",
        "MissingAuthenticationToken",
    }
)


class ErrorKind(str, Enum):
    SESSION_EXPIRED = "session_expired"
    NO_CREDENTIALS = "no_credentials"
    TRANSIENT = "transient"


class FunctionListError(RuntimeError):
    """A listing failure carrying its classified kind."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class PageLimitExceeded(FunctionListError):
    def __init__(self, max_pages: int) -> None:
        super().__init__(
            ErrorKind.TRANSIENT,
            f"ListFunctions did not finish within {max_pages} pages",
        )
        self.max_pages = max_pages


def _client_error_code(exc: ClientError) -> str:
    error = exc.response.get("Error") or {}
    return str(error.get("Code") or "")


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception raised while listing functions to an ErrorKind."""
    if isinstance(exc, FunctionListError):
        return exc.kind
    if isinstance(exc, (TokenRetrievalError, UnauthorizedSSOTokenError, SSOTokenLoadError)):
        return ErrorKind.SESSION_EXPIRED
    if isinstance(exc, (NoCredentialsError, PartialCredentialsError, ProfileNotFound)):
        return ErrorKind.NO_CREDENTIALS
    if isinstance(exc, ClientError):
        code = _client_error_code(exc)
        if code in _SESSION_EXPIRED_CODES:
            return ErrorKind.SESSION_EXPIRED
        if code in _NO_CREDENTIALS_CODES:
            return ErrorKind.NO_CREDENTIALS
        return ErrorKind.TRANSIENT
    # Endpoint, connection and read-timeout errors are all BotoCoreError.
    return ErrorKind.TRANSIENT
