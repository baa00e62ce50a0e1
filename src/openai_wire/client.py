"""Async HTTP client for the OpenAI-compatible REST API.

The client only moves bytes: request payloads are plain dicts encoded by
httpx, and every response goes through :func:`parse_response` or, for
streams, :func:`aiter_frames`. No retries are attempted.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel

from openai_wire.config import Settings
from openai_wire.errors import TRANSPORT_EXCEPTIONS, DecodeError, TransportError
from openai_wire.models.identifiers import Model, serialize_model
from openai_wire.models.results import (
    AudioTranscriptionResult,
    AudioTranslationResult,
    ChatResult,
    ChatStreamResult,
    CompletionsResult,
    EditsResult,
    EmbeddingsResult,
    ImagesResult,
    ModelResult,
    ModelsResult,
    ModerationsResult,
)
from openai_wire.responses import is_event_stream, is_success, parse_api_error, parse_response
from openai_wire.streaming import StreamFrame, aiter_frames

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class OpenAIClient:
    """Endpoint methods returning typed results.

    Non-streaming methods return one result or raise TransportError,
    APIError or DecodeError. Streaming methods return an async iterator of
    StreamFrame; stop iterating at any time to abandon the stream.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._settings.api_key}"}
        if self._settings.organization:
            headers["OpenAI-Organization"] = self._settings.organization
        return headers

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _request(
        self,
        result_type: type[T],
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
    ) -> T:
        client = await self._get_http_client()
        logger.info("api_request_start", method=method, path=path, target=result_type.__name__)

        try:
            response = await client.request(
                method,
                self._url(path),
                headers=self._headers(),
                json=json,
                data=data,
                files=files,
            )
        except TRANSPORT_EXCEPTIONS as exc:
            logger.error("api_transport_failed", method=method, path=path, error=str(exc))
            raise TransportError(f"{method} {path} failed: {exc}", cause=exc) from exc

        logger.info("api_request_complete", method=method, path=path, status_code=response.status_code)
        return parse_response(result_type, response.status_code, response.content)

    async def _stream(
        self,
        result_type: type[T],
        path: str,
        payload: dict[str, Any],
    ) -> AsyncIterator[StreamFrame]:
        client = await self._get_http_client()
        body = {**payload, "stream": True}
        logger.info("api_stream_start", path=path, target=result_type.__name__)

        frame_count = 0
        try:
            async with client.stream(
                "POST", self._url(path), headers=self._headers(), json=body
            ) as response:
                if not is_success(response.status_code):
                    raise parse_api_error(response.status_code, await response.aread())

                if not is_event_stream(response.headers.get("content-type")):
                    # Server ignored the stream flag and sent one complete body.
                    raw = await response.aread()
                    try:
                        result = parse_response(result_type, response.status_code, raw)
                    except DecodeError as error:
                        yield StreamFrame(kind="error", error=error, raw=raw.decode("utf-8", errors="replace"))
                    else:
                        yield StreamFrame(kind="result", result=result)
                    return

                async for frame in aiter_frames(
                    response.aiter_bytes(),
                    result_type,
                    data_prefix=self._settings.stream_data_prefix,
                    done_token=self._settings.stream_done_token,
                ):
                    frame_count += 1
                    yield frame
        except TRANSPORT_EXCEPTIONS as exc:
            logger.error("api_transport_failed", method="POST", path=path, error=str(exc))
            raise TransportError(f"POST {path} failed: {exc}", cause=exc) from exc

        logger.info("api_stream_complete", path=path, frames=frame_count)

    async def completions(self, payload: dict[str, Any]) -> CompletionsResult:
        return await self._request(CompletionsResult, "POST", "/completions", json=payload)

    def completions_stream(self, payload: dict[str, Any]) -> AsyncIterator[StreamFrame]:
        return self._stream(CompletionsResult, "/completions", payload)

    async def chat(self, payload: dict[str, Any]) -> ChatResult:
        return await self._request(ChatResult, "POST", "/chat/completions", json=payload)

    def chat_stream(self, payload: dict[str, Any]) -> AsyncIterator[StreamFrame]:
        return self._stream(ChatStreamResult, "/chat/completions", payload)

    async def edits(self, payload: dict[str, Any]) -> EditsResult:
        return await self._request(EditsResult, "POST", "/edits", json=payload)

    async def embeddings(self, payload: dict[str, Any]) -> EmbeddingsResult:
        return await self._request(EmbeddingsResult, "POST", "/embeddings", json=payload)

    async def images(self, payload: dict[str, Any]) -> ImagesResult:
        return await self._request(ImagesResult, "POST", "/images/generations", json=payload)

    async def audio_transcriptions(
        self,
        file: bytes,
        file_name: str,
        model: Model | str = Model.WHISPER_1,
        **params: Any,
    ) -> AudioTranscriptionResult:
        """Upload audio for transcription in its source language."""
        return await self._request(
            AudioTranscriptionResult,
            "POST",
            "/audio/transcriptions",
            data=self._form(model, params),
            files={"file": (file_name, file)},
        )

    async def audio_translations(
        self,
        file: bytes,
        file_name: str,
        model: Model | str = Model.WHISPER_1,
        **params: Any,
    ) -> AudioTranslationResult:
        """Upload audio for translation into English."""
        return await self._request(
            AudioTranslationResult,
            "POST",
            "/audio/translations",
            data=self._form(model, params),
            files={"file": (file_name, file)},
        )

    async def moderations(self, payload: dict[str, Any]) -> ModerationsResult:
        return await self._request(ModerationsResult, "POST", "/moderations", json=payload)

    async def models(self) -> ModelsResult:
        return await self._request(ModelsResult, "GET", "/models")

    async def model(self, model: Model | str) -> ModelResult:
        return await self._request(ModelResult, "GET", f"/models/{serialize_model(model)}")

    @staticmethod
    def _form(model: Model | str, params: dict[str, Any]) -> dict[str, str]:
        form = {"model": serialize_model(model)}
        form.update({key: str(value) for key, value in params.items() if value is not None})
        return form

    async def close(self) -> None:
        if self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
