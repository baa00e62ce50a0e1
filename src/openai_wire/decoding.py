"""Tolerant decoding of JSON documents into result models."""

from typing import Any, TypeVar

import json5
import structlog
from pydantic import BaseModel, ValidationError
from pydantic_core import from_json

from openai_wire.errors import DecodeError, FieldFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# pydantic error types -> wire shape the field wanted
_EXPECTED_BY_ERROR_TYPE = {
    "missing": "required field",
    "string_type": "string",
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "float_type": "number",
    "float_parsing": "number",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
}


def json_type_name(value: Any) -> str:
    """Name of the JSON shape of an already-parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def format_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``$.choices[0].text``."""
    parts = ["$"]
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}")
    return "".join(parts)


def _field_failure(error: dict[str, Any]) -> FieldFailure:
    error_type = error["type"]
    expected = _EXPECTED_BY_ERROR_TYPE.get(error_type, error["msg"])
    if error_type == "missing":
        found = "nothing"
    elif error_type == "int_from_float":
        found = f"fractional number {error['input']!r}"
    else:
        found = json_type_name(error.get("input"))
    return FieldFailure(path=format_path(error["loc"]), expected=expected, found=found)


def decode_error_from_validation(exc: ValidationError) -> DecodeError:
    """Convert a pydantic ValidationError into a DecodeError."""
    failures = [_field_failure(error) for error in exc.errors()]
    first = failures[0]
    return DecodeError(first.path, first.expected, first.found, failures=failures)


def parse_document(raw: bytes | str) -> Any:
    """Parse JSON text into a document tree, raising DecodeError on bad syntax.

    Strict JSON is tried first. Documents it rejects are retried with the
    JSON5 grammar, which accepts the trailing commas some servers emit.
    """
    try:
        return from_json(raw)
    except ValueError as exc:
        strict_error = exc

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("$", "JSON document", str(strict_error)) from exc
    try:
        document = json5.loads(raw)
    except ValueError as exc:
        raise DecodeError("$", "JSON document", str(strict_error)) from exc

    logger.debug("lenient_json_parsed", length=len(raw))
    return document


def decode(result_type: type[T], document: Any) -> T:
    """Decode an already-parsed JSON document into ``result_type``.

    Args:
        result_type: Target result model.
        document: JSON tree (dicts, lists, scalars).

    Returns:
        A fully populated, immutable instance of ``result_type``.

    Raises:
        DecodeError: A required field is missing or a field has the wrong shape.
    """
    try:
        return result_type.model_validate(document)
    except ValidationError as exc:
        error = decode_error_from_validation(exc)
        logger.debug(
            "decode_failed",
            target=result_type.__name__,
            path=error.path,
            expected=error.expected,
            found=error.found,
            failure_count=len(error.failures),
        )
        raise error from exc


def decode_json(result_type: type[T], raw: bytes | str) -> T:
    """Parse JSON text and decode it into ``result_type``."""
    return decode(result_type, parse_document(raw))
