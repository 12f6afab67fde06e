"""
Engine delegation tools

Hand a whole task to one of the engine's agents and return what it reports.
"""

from pydantic import BaseModel, Field

from seaward.engine.client import EngineClient
from seaward.tools.base import ToolError, response_json
from seaward.tools.registry import Tool


class EngineAgentParams(BaseModel):
    user_id: str = Field(..., description="The user ID")
    prompt: str = Field(..., description="The prompt describing the task for the agent")
    url: str = Field(..., description="The URL of the current project's public address")


async def _run_flow(engine_call, params: EngineAgentParams):
    response = await engine_call(params.model_dump())
    if response.is_error:
        raise ToolError(
            code="ENGINE_ERROR",
            message=f"Engine API request failed: {response.status_code} {response.text}",
        )
    return response_json(response)


def register_browser_agent_tool(registry, engine_client: EngineClient):
    """Register browserAgentTool"""
    registry.register_tool(Tool(
        name="browserAgentTool",
        description=(
            "Specialized agent for tasks that require interacting with a web browser, such as "
            "searching for information, summarizing webpages, or performing browser-based actions "
            "as delegated by the main assistant."
        ),
        parameters=EngineAgentParams,
        handler=lambda params: _run_flow(engine_client.browser_full_flow, params),
    ))


def register_codebase_agent_tool(registry, engine_client: EngineClient):
    """Register codebaseAgentTool"""
    registry.register_tool(Tool(
        name="codebaseAgentTool",
        description=(
            "Specialized agent for tasks that involve reading, writing, or modifying code in the "
            "user's projects, such as refactoring functions, adding features, or performing "
            "codebase operations as delegated by the main assistant."
        ),
        parameters=EngineAgentParams,
        handler=lambda params: _run_flow(engine_client.codebase_full_flow, params),
    ))
