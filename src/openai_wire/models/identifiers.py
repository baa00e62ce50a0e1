"""Open string enumerations: known symbolic values with a raw-string fallback.

The API adds model names, finish reasons and object tags over time. Fields
carrying them are typed ``SomeEnum | str``: a recognized wire string becomes
the enum member, anything else is kept verbatim so decoding never rejects a
value the server is entitled to send.
"""

from enum import Enum
from typing import Annotated, Any, TypeVar

from pydantic import PlainSerializer, PlainValidator

E = TypeVar("E", bound=Enum)


class Model(str, Enum):
    """Model names known to this library."""

    # Chat
    GPT4 = "gpt-4"
    GPT4_0314 = "gpt-4-0314"
    GPT4_0613 = "gpt-4-0613"
    GPT4_32K = "gpt-4-32k"
    GPT4_32K_0314 = "gpt-4-32k-0314"
    GPT4_32K_0613 = "gpt-4-32k-0613"
    GPT3_5_TURBO = "gpt-3.5-turbo"
    GPT3_5_TURBO_0301 = "gpt-3.5-turbo-0301"
    GPT3_5_TURBO_0613 = "gpt-3.5-turbo-0613"
    GPT3_5_TURBO_16K = "gpt-3.5-turbo-16k"
    GPT3_5_TURBO_16K_0613 = "gpt-3.5-turbo-16k-0613"

    # Completions
    TEXT_DAVINCI_003 = "text-davinci-003"
    TEXT_DAVINCI_002 = "text-davinci-002"
    TEXT_DAVINCI_001 = "text-davinci-001"
    TEXT_CURIE_001 = "text-curie-001"
    TEXT_BABBAGE_001 = "text-babbage-001"
    TEXT_ADA_001 = "text-ada-001"
    DAVINCI = "davinci"
    CURIE = "curie"
    BABBAGE = "babbage"
    ADA = "ada"
    CODE_DAVINCI_002 = "code-davinci-002"
    CODE_CUSHMAN_001 = "code-cushman-001"

    # Edits
    TEXT_DAVINCI_EDIT_001 = "text-davinci-edit-001"
    CODE_DAVINCI_EDIT_001 = "code-davinci-edit-001"

    # Embeddings
    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"
    TEXT_SEARCH_ADA_DOC_001 = "text-search-ada-doc-001"

    # Audio
    WHISPER_1 = "whisper-1"

    # Moderations
    TEXT_MODERATION_STABLE = "text-moderation-stable"
    TEXT_MODERATION_LATEST = "text-moderation-latest"

    # Images
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"
    TOOL_CALLS = "tool_calls"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class ObjectKind(str, Enum):
    """Values of the ``object`` tag found on result documents."""

    TEXT_COMPLETION = "text_completion"
    CHAT_COMPLETION = "chat.completion"
    CHAT_COMPLETION_CHUNK = "chat.completion.chunk"
    EDIT = "edit"
    EMBEDDING = "embedding"
    LIST = "list"
    MODEL = "model"


def resolve_open(enum_cls: type[E], raw: str) -> E | str:
    """Map ``raw`` to a member of ``enum_cls``, or return it unchanged."""
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


def serialize_open(value: Enum | str) -> str:
    """Inverse of :func:`resolve_open`."""
    if isinstance(value, Enum):
        return value.value
    return value


def open_enum(enum_cls: type[E]) -> Any:
    """Build an annotated ``enum_cls | str`` type for pydantic fields.

    Validation accepts any string (members for known values, passthrough
    otherwise) and rejects non-string wire values. Serialization always
    yields the wire string.
    """

    def _validate(value: Any) -> E | str:
        if isinstance(value, enum_cls):
            return value
        if not isinstance(value, str):
            raise ValueError(
                f"expected string for {enum_cls.__name__}, got {type(value).__name__}"
            )
        return resolve_open(enum_cls, value)

    return Annotated[
        enum_cls | str,
        PlainValidator(_validate),
        PlainSerializer(serialize_open, return_type=str),
    ]


def resolve_model(raw: str) -> Model | str:
    """Resolve a wire model name. Never fails."""
    return resolve_open(Model, raw)


def serialize_model(value: Model | str) -> str:
    return serialize_open(value)


def is_known_model(value: Model | str) -> bool:
    return isinstance(value, Model)


ModelId = open_enum(Model)
FinishReasonValue = open_enum(FinishReason)
RoleValue = open_enum(Role)
ObjectKindValue = open_enum(ObjectKind)
