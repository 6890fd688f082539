"""SDK exception hierarchy and HTTP-failure classification.

Error bodies follow RFC 7807 (``type``, ``title``, ``detail``, ``instance``);
400 responses may add ``invalidParams`` or ``errors``.
"""

from typing import NoReturn

import requests


class PiSpiError(Exception):
    """Base error for every failed PI-SPI API call."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        type: str | None = None,
        detail: str | None = None,
        instance: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_text = status_text
        self.type = type
        self.detail = detail
        self.instance = instance


class PiSpiValidationError(PiSpiError):
    def __init__(self, message, status_code, status_text="", errors=None, type=None, detail=None):
        super().__init__(message, status_code, status_text, type, detail)
        self.errors = errors


class PiSpiAuthError(PiSpiError):
    pass


class PiSpiNotFoundError(PiSpiError):
    pass


class PiSpiRateLimitError(PiSpiError):
    def __init__(self, message, status_code, status_text="", retry_after: int | None = None):
        super().__init__(message, status_code, status_text)
        self.retry_after = retry_after


def raise_for_status(status: int, status_text: str = "", body=None, fallback: str = "") -> NoReturn:
    """Raise the PiSpiError subclass matching ``status``."""
    problem = body if isinstance(body, dict) else {}
    type_ = problem.get("type")
    title = problem.get("title") or status_text
    detail = problem.get("detail") or fallback
    instance = problem.get("instance")

    if status == 400:
        raise PiSpiValidationError(
            detail or title or "Validation error",
            status,
            status_text,
            problem.get("invalidParams") or problem.get("errors"),
            type_,
            detail,
        )
    if status == 401:
        raise PiSpiAuthError(detail or title or "Authentication failed", status, status_text)
    if status == 403:
        raise PiSpiError(detail or title or "Forbidden", status, status_text, type_, detail, instance)
    if status == 404:
        raise PiSpiNotFoundError(detail or title or "Resource not found", status, status_text)
    if status == 429:
        raise PiSpiRateLimitError(
            detail or title or "Rate limit exceeded",
            status,
            status_text,
            problem.get("retryAfter"),
        )
    raise PiSpiError(detail or title or "API error", status, status_text, type_, detail, instance)


def handle_api_error(error) -> NoReturn:
    """Convert an HTTP failure into a PiSpiError; re-raise anything else unchanged."""
    if isinstance(error, requests.HTTPError) and error.response is not None:
        response = error.response
        raise_for_status(response.status_code, response.reason or "", _response_body(response), str(error))

    has_status_text = hasattr(error, "status_text") or hasattr(error, "statusText")
    if hasattr(error, "status") and has_status_text and hasattr(error, "body"):
        status_text = getattr(error, "status_text", getattr(error, "statusText", None)) or ""
        message = str(error) if isinstance(error, BaseException) else ""
        raise_for_status(error.status, status_text, error.body, message)

    raise error


def raise_for_result(result):
    """Unwrap a transport result: return the value or raise the mapped error."""
    if result.kind == "ok":
        return result.value
    if result.kind == "httpError":
        raise_for_status(result.status, result.status_text, result.body)
    raise result.cause


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text or None
