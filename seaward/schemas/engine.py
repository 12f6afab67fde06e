"""
Engine request/response schemas.

Shapes of the delegate routes that proxy to the engine. The engine's own
models are richer; only what this service forwards or reads is checked and
everything else is passed through.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator


def ensure_absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


def flatten_field_errors(error: ValidationError) -> Dict[str, List[str]]:
    """Group validation messages by top-level field name."""
    errors: Dict[str, List[str]] = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "__root__"
        errors.setdefault(field, []).append(item["msg"])
    return errors


# Browser workflow

class UserMetadata(BaseModel):
    website_url: str
    last_active_timestamp: Optional[str] = None

    @field_validator("website_url")
    @classmethod
    def website_url_is_url(cls, value: str) -> str:
        return ensure_absolute_url(value)

    @field_validator("last_active_timestamp")
    @classmethod
    def timestamp_is_iso(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        return value


class BrowserContextConfig(BaseModel):
    window_width: Optional[int] = Field(None, gt=0)
    window_height: Optional[int] = Field(None, gt=0)
    locale: Optional[str] = None
    user_agent: Optional[str] = None
    allowed_domains: Optional[List[str]] = None
    maximum_wait_page_load_time: Optional[int] = Field(None, gt=0)
    highlight_elements: Optional[bool] = None
    keep_alive: Optional[bool] = None
    save_recording_path: Optional[str] = None


class BrowserAgentRequest(BaseModel):
    userId: str
    prompt: str
    contextConfig: BrowserContextConfig
    metadata: UserMetadata

    def to_engine_payload(self) -> Dict[str, Any]:
        return {
            "user_id": self.userId,
            "context_config": self.contextConfig.model_dump(exclude_unset=True),
            "metadata": self.metadata.model_dump(exclude_unset=True),
            "prompt": self.prompt,
        }


class BrowserAgentResponse(BaseModel):
    final_result: str


# Codebase workflow

class CodebaseProject(BaseModel):
    project_address: str
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("project_address")
    @classmethod
    def project_address_is_url(cls, value: str) -> str:
        try:
            return ensure_absolute_url(value)
        except ValueError:
            raise ValueError("Invalid project address URL")


class CodebaseAgentRequest(BaseModel):
    userId: str
    project: CodebaseProject
    prompt: str

    def to_engine_payload(self) -> Dict[str, Any]:
        return {
            "user_id": self.userId,
            "project": {
                "project_address": self.project.project_address,
                "metadata": self.project.metadata,
            },
            "prompt": self.prompt,
        }
