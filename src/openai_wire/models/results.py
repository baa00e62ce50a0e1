"""Typed response models for every endpoint family.

Attribute names mirror the snake_case wire fields. Models are immutable and
ignore wire fields they do not declare, so newer server payloads still
decode. Optional fields read as ``None`` when absent or explicitly null.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

from openai_wire.models.identifiers import (
    FinishReasonValue,
    ModelId,
    ObjectKindValue,
    RoleValue,
)


def _not_bool(error_type: str, message: str):
    def _validate(value: Any) -> Any:
        # pydantic's lax mode would read JSON true/false as 1/0
        if isinstance(value, bool):
            raise PydanticCustomError(error_type, message)
        return value

    return _validate


WireInt = Annotated[int, BeforeValidator(_not_bool("int_type", "Input should be a valid integer"))]
WireFloat = Annotated[float, BeforeValidator(_not_bool("float_type", "Input should be a valid number"))]


class WireModel(BaseModel):
    """Base for all decoded wire structures."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Usage(WireModel):
    """Token accounting. ``total_tokens`` is not checked against the parts."""

    prompt_tokens: WireInt
    completion_tokens: WireInt | None = None
    total_tokens: WireInt


class LogProbs(WireModel):
    tokens: list[str] | None = None
    token_logprobs: list[WireFloat | None] | None = None
    top_logprobs: list[dict[str, WireFloat] | None] | None = None
    text_offset: list[WireInt] | None = None


# Completions


class CompletionChoice(WireModel):
    text: str
    index: WireInt
    logprobs: LogProbs | None = None
    finish_reason: FinishReasonValue | None = None


class CompletionsResult(WireModel):
    """Result of ``/completions``; streamed chunks share this shape."""

    id: str
    object: ObjectKindValue
    created: WireInt
    model: ModelId
    choices: list[CompletionChoice]
    usage: Usage | None = None


# Chat


class FunctionCall(WireModel):
    # Streamed function calls arrive in fragments, so both parts are optional.
    name: str | None = None
    arguments: str | None = None


class ChatMessage(WireModel):
    role: RoleValue
    content: str | None = None
    name: str | None = None
    function_call: FunctionCall | None = None


class ChatChoice(WireModel):
    index: WireInt
    message: ChatMessage
    finish_reason: FinishReasonValue | None = None


class ChatResult(WireModel):
    id: str
    object: ObjectKindValue
    created: WireInt
    model: ModelId
    choices: list[ChatChoice]
    usage: Usage | None = None


class ChatDelta(WireModel):
    """Incremental message fragment carried by a streamed chat chunk."""

    role: RoleValue | None = None
    content: str | None = None
    function_call: FunctionCall | None = None


class ChatStreamChoice(WireModel):
    index: WireInt
    delta: ChatDelta
    finish_reason: FinishReasonValue | None = None


class ChatStreamResult(WireModel):
    id: str
    object: ObjectKindValue
    created: WireInt
    model: ModelId
    choices: list[ChatStreamChoice]
    usage: Usage | None = None


# Edits


class EditChoice(WireModel):
    text: str
    index: WireInt


class EditsResult(WireModel):
    object: ObjectKindValue
    created: WireInt
    choices: list[EditChoice]
    usage: Usage


# Embeddings


class Embedding(WireModel):
    object: ObjectKindValue
    embedding: list[WireFloat]
    index: WireInt


class EmbeddingsResult(WireModel):
    object: ObjectKindValue | None = None
    data: list[Embedding]
    model: ModelId | None = None
    usage: Usage


# Images


class ImageData(WireModel):
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


class ImagesResult(WireModel):
    created: WireInt
    data: list[ImageData]


# Audio


class AudioTranscriptionResult(WireModel):
    text: str
    language: str | None = None
    duration: WireFloat | None = None


class AudioTranslationResult(WireModel):
    text: str
    language: str | None = None
    duration: WireFloat | None = None


# Moderations


class ModerationCategories(WireModel):
    hate: bool
    hate_threatening: bool = Field(alias="hate/threatening")
    self_harm: bool = Field(alias="self-harm")
    sexual: bool
    sexual_minors: bool = Field(alias="sexual/minors")
    violence: bool
    violence_graphic: bool = Field(alias="violence/graphic")


class ModerationCategoryScores(WireModel):
    hate: WireFloat
    hate_threatening: WireFloat = Field(alias="hate/threatening")
    self_harm: WireFloat = Field(alias="self-harm")
    sexual: WireFloat
    sexual_minors: WireFloat = Field(alias="sexual/minors")
    violence: WireFloat
    violence_graphic: WireFloat = Field(alias="violence/graphic")


class Moderation(WireModel):
    categories: ModerationCategories
    category_scores: ModerationCategoryScores
    flagged: bool


class ModerationsResult(WireModel):
    id: str
    model: ModelId
    results: list[Moderation]


# Models


class ModelResult(WireModel):
    id: ModelId
    object: ObjectKindValue
    owned_by: str
    created: WireInt | None = None


class ModelsResult(WireModel):
    data: list[ModelResult]
    object: ObjectKindValue
