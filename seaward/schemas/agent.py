"""Agent, backbone and Galatea request schemas."""
from typing import List, Optional

from pydantic import BaseModel, Field

from seaward.schemas.ui_message import UIMessage


class AgentRequest(BaseModel):
    """One chat turn: the whole visible history plus where it happens."""
    messages: List[UIMessage] = Field(..., min_length=1)
    projectId: Optional[str] = None
    projectSessionId: Optional[str] = None
    model: Optional[str] = None


class AvailableModels(BaseModel):
    models: List[str]


class SSHConfig(BaseModel):
    host: str
    port: Optional[int] = 22
    username: str
    password: Optional[str] = None
    privateKey: Optional[str] = None
