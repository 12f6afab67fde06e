"""
UI message schema.

The persisted shape of a chat message as the chat client renders it: an id, a
role, optional metadata and an ordered list of typed parts. Unknown keys are
dropped; dumps omit fields that were never set.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class ToolCallInvocation(BaseModel):
    """Tool invocation whose arguments are known (or still streaming)."""
    state: Literal["partial-call", "call"]
    step: Optional[int] = None
    toolCallId: str
    toolName: str
    args: Any = None


class ToolResultInvocation(BaseModel):
    """Tool invocation that has produced a result."""
    state: Literal["result"]
    step: Optional[int] = None
    toolCallId: str
    toolName: str
    args: Any = None
    result: Any = None
    isError: Optional[bool] = None


ToolInvocation = Annotated[
    Union[ToolCallInvocation, ToolResultInvocation],
    Field(discriminator="state"),
]


class TextUIPart(BaseModel):
    type: Literal["text"]
    text: str


class ReasoningUIPart(BaseModel):
    type: Literal["reasoning"]
    text: str
    providerMetadata: Optional[Dict[str, Any]] = None


class ToolInvocationUIPart(BaseModel):
    type: Literal["tool-invocation"]
    toolInvocation: ToolInvocation


class SourceUrlUIPart(BaseModel):
    type: Literal["source-url"]
    sourceId: str
    url: str
    title: Optional[str] = None
    providerMetadata: Optional[Dict[str, Any]] = None

    @field_validator("url")
    @classmethod
    def url_must_be_absolute(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid url")
        return value


class FileUIPart(BaseModel):
    """File attachment; url may be a remote URL or a data URL."""
    type: Literal["file"]
    mediaType: str
    filename: Optional[str] = None
    url: str


class StepStartUIPart(BaseModel):
    type: Literal["step-start"]


KnownUIPart = Annotated[
    Union[
        TextUIPart,
        ReasoningUIPart,
        ToolInvocationUIPart,
        SourceUrlUIPart,
        FileUIPart,
        StepStartUIPart,
    ],
    Field(discriminator="type"),
]


class DataUIPart(BaseModel):
    """Application-defined part; the type must start with 'data-'."""
    type: str
    id: Optional[str] = None
    data: Dict[str, Any]

    @field_validator("type")
    @classmethod
    def type_must_be_data(cls, value: str) -> str:
        if not value.startswith("data-"):
            raise ValueError("Type must start with 'data-'")
        return value


UIMessagePart = Union[KnownUIPart, DataUIPart]


class UIMessage(BaseModel):
    """A chat message as stored and replayed."""
    id: str
    role: Literal["system", "user", "assistant"]
    metadata: Optional[Dict[str, Any]] = None
    parts: List[UIMessagePart]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


parts_adapter = TypeAdapter(List[UIMessagePart])


def validate_parts(parts: Any) -> List[Dict[str, Any]]:
    """Validate a parts list, returning it in its normalised form.

    Raises:
        pydantic.ValidationError: If any part is malformed
    """
    validated = parts_adapter.validate_python(parts)
    return parts_adapter.dump_python(validated, mode="json", exclude_unset=True)
