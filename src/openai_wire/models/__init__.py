"""Identifier registry and result models."""

from openai_wire.models.identifiers import (
    FinishReason,
    Model,
    ModelId,
    ObjectKind,
    Role,
    is_known_model,
    open_enum,
    resolve_model,
    resolve_open,
    serialize_model,
    serialize_open,
)
from openai_wire.models.results import (
    AudioTranscriptionResult,
    AudioTranslationResult,
    ChatChoice,
    ChatDelta,
    ChatMessage,
    ChatResult,
    ChatStreamChoice,
    ChatStreamResult,
    CompletionChoice,
    CompletionsResult,
    EditChoice,
    EditsResult,
    Embedding,
    EmbeddingsResult,
    FunctionCall,
    ImageData,
    ImagesResult,
    LogProbs,
    Moderation,
    ModerationCategories,
    ModerationCategoryScores,
    ModerationsResult,
    ModelResult,
    ModelsResult,
    Usage,
    WireModel,
)

__all__ = [
    "AudioTranscriptionResult",
    "AudioTranslationResult",
    "ChatChoice",
    "ChatDelta",
    "ChatMessage",
    "ChatResult",
    "ChatStreamChoice",
    "ChatStreamResult",
    "CompletionChoice",
    "CompletionsResult",
    "EditChoice",
    "EditsResult",
    "Embedding",
    "EmbeddingsResult",
    "FinishReason",
    "FunctionCall",
    "ImageData",
    "ImagesResult",
    "LogProbs",
    "Model",
    "ModelId",
    "ModelResult",
    "ModelsResult",
    "Moderation",
    "ModerationCategories",
    "ModerationCategoryScores",
    "ModerationsResult",
    "ObjectKind",
    "Role",
    "Usage",
    "WireModel",
    "is_known_model",
    "open_enum",
    "resolve_model",
    "resolve_open",
    "serialize_model",
    "serialize_open",
]
