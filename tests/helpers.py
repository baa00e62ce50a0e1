"""Shared builders for streamed response documents."""

import json


def make_chat_chunk(content=None, role=None, finish_reason=None, index=0, model="gpt-4"):
    """Build a streamed chat.completion.chunk document."""
    delta = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1677652288,
        "model": model,
        "choices": [
            {"index": index, "delta": delta, "finish_reason": finish_reason},
        ],
    }


def sse_event(document) -> str:
    """Frame one document (or raw payload string) as an SSE data event."""
    payload = document if isinstance(document, str) else json.dumps(document)
    return f"data: {payload}\n\n"


def summarize(frames):
    """Reduce frames to comparable tuples."""
    return [
        (
            frame.kind,
            frame.result.model_dump() if frame.result is not None else None,
            type(frame.error).__name__ if frame.error is not None else None,
        )
        for frame in frames
    ]
