"""Classify an HTTP status and body into a result or one error kind."""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from pydantic_core import from_json

from openai_wire.decoding import decode_json
from openai_wire.errors import APIError

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class ErrorDetail(BaseModel):
    """The ``error`` object of the server's error schema."""

    message: str | None = None
    type: str | None = None
    code: str | int | None = None
    # servers send an index or a field name here
    param: Any = None


class ErrorDocument(BaseModel):
    error: ErrorDetail


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_event_stream(content_type: str | None) -> bool:
    """Whether a Content-Type header announces SSE framing."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == EVENT_STREAM_CONTENT_TYPE


def error_from_document(document: Any, status_code: int | None, body: str | None = None) -> APIError | None:
    """Build an APIError from a parsed document, or None if it is not an error document."""
    try:
        parsed = ErrorDocument.model_validate(document)
    except ValidationError:
        return None
    detail = parsed.error
    return APIError(
        status_code,
        message=detail.message,
        type=detail.type,
        code=str(detail.code) if detail.code is not None else None,
        param=str(detail.param) if detail.param is not None else None,
        body=body,
    )


def _body_text(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def parse_api_error(status_code: int, body: bytes | str) -> APIError:
    """Classify a non-2xx response body.

    A body matching the server's error schema yields its message, type,
    code and param. Anything else yields an APIError carrying only the
    status and the raw body text.
    """
    text = _body_text(body)
    try:
        document = from_json(body) if body else None
    except ValueError:
        document = None

    error = error_from_document(document, status_code, body=text) if document is not None else None
    if error is None:
        error = APIError(status_code, body=text)

    logger.warning(
        "api_error_response",
        status_code=status_code,
        error_type=error.type,
        error_code=error.code,
        message=error.message,
    )
    return error


def parse_response(
    result_type: type[T],
    status_code: int,
    body: bytes | str,
) -> T:
    """Turn a complete HTTP response into a result.

    Raises:
        APIError: Non-2xx status.
        DecodeError: 2xx status but the body does not match ``result_type``.
    """
    if not is_success(status_code):
        raise parse_api_error(status_code, body)
    return decode_json(result_type, body)
