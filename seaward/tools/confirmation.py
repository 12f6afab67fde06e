"""Confirmation tool: the client asks the user and returns the answer."""
from pydantic import BaseModel, Field

from seaward.tools.registry import Tool


class AskConfirmationParams(BaseModel):
    proposition: str = Field(..., description="The proposition to ask the user for confirmation")


def register_ask_confirmation_tool(registry):
    """Register askConfirmationTool. It has no handler, so calling it ends the turn."""
    registry.register_tool(Tool(
        name="askConfirmationTool",
        description="Ask user for confirmation, the user will respond with 'approve' or 'reject'",
        parameters=AskConfirmationParams,
    ))
