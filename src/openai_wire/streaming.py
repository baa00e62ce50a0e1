"""Incremental decoding of server-sent event (SSE) streams.

Streamed completions arrive as ``data: <json>`` lines, one JSON chunk per
event, and end with ``data: [DONE]``. :class:`SSEDecoder` is a pull-based
state machine: feed it transport chunks as they arrive (lines may be split
anywhere) and drain the decoded frames. :func:`iter_frames` and
:func:`aiter_frames` wrap it for sync and async chunk sources.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

import structlog
from pydantic import BaseModel

from openai_wire.decoding import decode, parse_document
from openai_wire.errors import TRANSPORT_EXCEPTIONS, APIError, DecodeError, TransportError
from openai_wire.models.identifiers import ObjectKind, Role
from openai_wire.models.results import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatStreamResult,
    FunctionCall,
    Usage,
)
from openai_wire.responses import error_from_document

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

DATA_PREFIX = "data:"
DONE_TOKEN = "[DONE]"


@dataclass(slots=True)
class StreamFrame:
    """A single decoded SSE event."""

    kind: Literal["result", "error", "done"]
    result: BaseModel | None = None
    error: DecodeError | APIError | None = None
    raw: str | None = None


class SSEDecoder(Generic[T]):
    """Decode an SSE byte stream into :class:`StreamFrame` objects.

    Exactly one frame is produced per complete ``data:`` line, in wire
    order. After the ``[DONE]`` sentinel the decoder is terminated and
    ignores any further input. A payload that fails to decode becomes an
    ``error`` frame; later events are still decoded.

    Instances hold only an internal byte buffer, so a consumer may abandon
    one mid-stream without closing it.
    """

    def __init__(
        self,
        result_type: type[T],
        data_prefix: str = DATA_PREFIX,
        done_token: str = DONE_TOKEN,
    ) -> None:
        self._result_type = result_type
        self._data_prefix = data_prefix.encode("utf-8")
        self._done_token = done_token
        self._buffer = b""
        self._pending: list[StreamFrame] = []
        self._terminated = False
        self._frame_count = 0

    @property
    def terminated(self) -> bool:
        return self._terminated

    def feed(self, chunk: bytes | str) -> None:
        """Consume the next transport chunk.

        Frames completed by this chunk become available from :meth:`drain`.
        """
        if self._terminated or not chunk:
            return
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")

        *lines, self._buffer = (self._buffer + chunk).split(b"\n")
        for line in lines:
            self._process_line(line)
            if self._terminated:
                self._buffer = b""
                break

    def finish(self) -> None:
        """Flush a trailing line left unterminated when the input ended."""
        if self._terminated:
            return
        tail, self._buffer = self._buffer, b""
        if tail:
            self._process_line(tail)

    def drain(self) -> list[StreamFrame]:
        """Return the frames decoded since the previous drain."""
        frames, self._pending = self._pending, []
        return frames

    def _process_line(self, line: bytes) -> None:
        if line.endswith(b"\r"):
            line = line[:-1]
        if not line or not line.startswith(self._data_prefix):
            # event separator, comment, or a field we do not use
            return

        raw_payload = line[len(self._data_prefix):]
        if raw_payload.startswith(b" "):
            raw_payload = raw_payload[1:]

        # Lines are decoded whole, so a character split across chunks is intact.
        try:
            payload = raw_payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            self._frame_count += 1
            error = DecodeError("$", "UTF-8 text", f"invalid byte at offset {exc.start}")
            logger.warning(
                "sse_frame_decode_failed",
                frame_number=self._frame_count,
                target=self._result_type.__name__,
                path=error.path,
                expected=error.expected,
                found=error.found,
            )
            self._pending.append(
                StreamFrame(kind="error", error=error, raw=raw_payload.decode("utf-8", errors="replace"))
            )
            return

        if payload.strip() == self._done_token:
            self._terminated = True
            self._pending.append(StreamFrame(kind="done", raw=payload))
            logger.debug("sse_stream_done", frame_count=self._frame_count)
            return

        self._frame_count += 1
        self._pending.append(self._decode_payload(payload))

    def _decode_payload(self, payload: str) -> StreamFrame:
        try:
            document = parse_document(payload)
            if isinstance(document, dict) and "error" in document:
                api_error = error_from_document(document, None, body=payload)
                if api_error is not None:
                    logger.warning(
                        "sse_frame_api_error",
                        frame_number=self._frame_count,
                        error_type=api_error.type,
                        message=api_error.message,
                    )
                    return StreamFrame(kind="error", error=api_error, raw=payload)
            result = decode(self._result_type, document)
        except DecodeError as error:
            logger.warning(
                "sse_frame_decode_failed",
                frame_number=self._frame_count,
                target=self._result_type.__name__,
                path=error.path,
                expected=error.expected,
                found=error.found,
            )
            return StreamFrame(kind="error", error=error, raw=payload)

        logger.debug(
            "sse_frame_decoded",
            frame_number=self._frame_count,
            target=self._result_type.__name__,
        )
        return StreamFrame(kind="result", result=result, raw=payload)


def iter_frames(
    chunks: Iterable[bytes | str],
    result_type: type[T],
    data_prefix: str = DATA_PREFIX,
    done_token: str = DONE_TOKEN,
) -> Iterator[StreamFrame]:
    """Lazily decode frames from a synchronous chunk source.

    Stops after the ``done`` frame without pulling more chunks. A transport
    exception from the source ends the sequence with TransportError.
    """
    decoder = SSEDecoder(result_type, data_prefix=data_prefix, done_token=done_token)
    iterator = iter(chunks)
    while True:
        try:
            chunk = next(iterator)
        except StopIteration:
            break
        except TRANSPORT_EXCEPTIONS as exc:
            logger.error("sse_transport_failed", error=str(exc))
            raise TransportError(f"stream interrupted: {exc}", cause=exc) from exc

        decoder.feed(chunk)
        yield from decoder.drain()
        if decoder.terminated:
            return

    decoder.finish()
    yield from decoder.drain()


async def aiter_frames(
    chunks: AsyncIterable[bytes | str],
    result_type: type[T],
    data_prefix: str = DATA_PREFIX,
    done_token: str = DONE_TOKEN,
) -> AsyncIterator[StreamFrame]:
    """Async counterpart of :func:`iter_frames`."""
    decoder = SSEDecoder(result_type, data_prefix=data_prefix, done_token=done_token)
    iterator = chunks.__aiter__()
    while True:
        try:
            chunk = await iterator.__anext__()
        except StopAsyncIteration:
            break
        except TRANSPORT_EXCEPTIONS as exc:
            logger.error("sse_transport_failed", error=str(exc))
            raise TransportError(f"stream interrupted: {exc}", cause=exc) from exc

        decoder.feed(chunk)
        for frame in decoder.drain():
            yield frame
        if decoder.terminated:
            return

    decoder.finish()
    for frame in decoder.drain():
        yield frame


@dataclass
class _ChoiceState:
    role: Role | str | None = None
    content_parts: list[str] = field(default_factory=list)
    function_name_parts: list[str] = field(default_factory=list)
    function_argument_parts: list[str] = field(default_factory=list)
    finish_reason: str | None = None


class ChatStreamAccumulator:
    """Fold streamed chat chunks into a complete :class:`ChatResult`.

    Chunks must be added in the order they were received. Choices keep the
    order in which their index first appeared.
    """

    def __init__(self) -> None:
        self._first: ChatStreamResult | None = None
        self._choices: dict[int, _ChoiceState] = {}
        self._usage: Usage | None = None
        self.chunk_count = 0

    def add(self, chunk: ChatStreamResult) -> None:
        if self._first is None:
            self._first = chunk
        self.chunk_count += 1
        if chunk.usage is not None:
            self._usage = chunk.usage

        for choice in chunk.choices:
            state = self._choices.setdefault(choice.index, _ChoiceState())
            delta = choice.delta
            if delta.role is not None:
                state.role = delta.role
            if delta.content:
                state.content_parts.append(delta.content)
            if delta.function_call is not None:
                if delta.function_call.name:
                    state.function_name_parts.append(delta.function_call.name)
                if delta.function_call.arguments:
                    state.function_argument_parts.append(delta.function_call.arguments)
            if choice.finish_reason is not None:
                state.finish_reason = choice.finish_reason

    def content(self, index: int = 0) -> str:
        state = self._choices.get(index)
        return "".join(state.content_parts) if state else ""

    def build(self) -> ChatResult:
        if self._first is None:
            raise ValueError("no chat chunks were accumulated")

        choices = []
        for index, state in self._choices.items():
            function_call = None
            if state.function_name_parts or state.function_argument_parts:
                function_call = FunctionCall(
                    name="".join(state.function_name_parts) or None,
                    arguments="".join(state.function_argument_parts) or None,
                )
            message = ChatMessage(
                role=state.role if state.role is not None else Role.ASSISTANT,
                content="".join(state.content_parts) if state.content_parts else None,
                function_call=function_call,
            )
            choices.append(ChatChoice(index=index, message=message, finish_reason=state.finish_reason))

        return ChatResult(
            id=self._first.id,
            object=ObjectKind.CHAT_COMPLETION,
            created=self._first.created,
            model=self._first.model,
            choices=choices,
            usage=self._usage,
        )
