"""Typed response decoding and SSE streaming for OpenAI-compatible APIs."""

from openai_wire.client import OpenAIClient
from openai_wire.config import Settings, get_settings
from openai_wire.decoding import decode, decode_json
from openai_wire.errors import APIError, DecodeError, FieldFailure, OpenAIWireError, TransportError
from openai_wire.responses import is_event_stream, parse_api_error, parse_response
from openai_wire.streaming import (
    ChatStreamAccumulator,
    SSEDecoder,
    StreamFrame,
    aiter_frames,
    iter_frames,
)

__all__ = [
    "APIError",
    "ChatStreamAccumulator",
    "DecodeError",
    "FieldFailure",
    "OpenAIClient",
    "OpenAIWireError",
    "SSEDecoder",
    "Settings",
    "StreamFrame",
    "TransportError",
    "aiter_frames",
    "decode",
    "decode_json",
    "get_settings",
    "is_event_stream",
    "iter_frames",
    "parse_api_error",
    "parse_response",
]
