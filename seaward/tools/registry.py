"""
Tool registry

Holds the tools the agent can call: their descriptions, parameter models
and handlers. Arguments are validated with the tool's pydantic model before
the handler runs. A tool without a handler is answered by the client.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type
import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass
class Tool:
    """Tool definition"""
    name: str
    description: str
    parameters: Type[BaseModel]
    handler: Optional[Callable[..., Awaitable[Any]]] = None

    @property
    def client_side(self) -> bool:
        return self.handler is None


class ToolRegistry:
    """Named tools available to the agent."""

    def __init__(self, name: str = "seaward-tools"):
        self.tools: Dict[str, Tool] = {}
        self.name = name
        logger.info(f"Initializing tool registry: {self.name}")

    def register_tool(self, tool: Tool):
        """Register a tool, replacing one with the same name"""
        if tool.name in self.tools:
            logger.warning(f"Tool {tool.name} already registered, overwriting")

        self.tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name}")

    def get_tool(self, name: str) -> Tool:
        """Get a registered tool by name"""
        if name not in self.tools:
            raise ValueError(f"Tool {name} not found. Available tools: {list(self.tools.keys())}")
        return self.tools[name]

    def list_tools(self) -> List[str]:
        """List all registered tool names"""
        return list(self.tools.keys())

    def subset(self, names: List[str]) -> "ToolRegistry":
        """A registry holding only the named tools."""
        registry = ToolRegistry(name=f"{self.name}:subset")
        for name in names:
            registry.tools[name] = self.get_tool(name)
        return registry

    async def invoke_tool(self, tool_name: str, arguments: Dict[str, Any]) -> Any:
        """
        Validate arguments and run a tool's handler.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Raw arguments produced by the model

        Returns:
            Tool execution result

        Raises:
            ValueError: If the tool is unknown or has no server-side handler
            pydantic.ValidationError: If the arguments do not fit the tool's parameters
        """
        tool = self.get_tool(tool_name)
        if tool.client_side:
            raise ValueError(f"Tool {tool_name} is answered by the client")

        params = tool.parameters.model_validate(arguments or {})
        logger.info(f"Invoking tool: {tool_name}")

        try:
            result = await tool.handler(params)
            logger.info(f"Tool {tool_name} executed successfully")
            return result
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {str(e)}")
            raise

    def get_tool_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Get JSON schemas for all registered tools"""
        return {
            name: {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters.model_json_schema()
            }
            for name, tool in self.tools.items()
        }


DEFAULT_AGENT_TOOLS = [
    "browserAgentTool",
    "codebaseFindFilesTool",
    "codebaseEditorCommandTool",
    "codebaseNpmScriptTool",
    "askConfirmationTool",
]

_registry: Optional[ToolRegistry] = None


def build_default_registry(engine_client=None, galatea_client_factory=None) -> ToolRegistry:
    """Register every tool. The agent is offered DEFAULT_AGENT_TOOLS out of these."""
    from seaward.engine.client import EngineClient
    from seaward.galatea.client import GalateaClient
    from seaward.tools.confirmation import register_ask_confirmation_tool
    from seaward.tools.engine_tools import register_browser_agent_tool, register_codebase_agent_tool
    from seaward.tools.codebase_tools import (
        register_codebase_editor_command_tool,
        register_codebase_find_files_tool,
        register_codebase_npm_script_tool,
    )

    engine_client = engine_client or EngineClient()
    galatea_client_factory = galatea_client_factory or GalateaClient

    registry = ToolRegistry()
    register_browser_agent_tool(registry, engine_client)
    register_codebase_agent_tool(registry, engine_client)
    register_codebase_find_files_tool(registry, galatea_client_factory)
    register_codebase_editor_command_tool(registry, galatea_client_factory)
    register_codebase_npm_script_tool(registry, galatea_client_factory)
    register_ask_confirmation_tool(registry)
    return registry


def get_tool_registry() -> ToolRegistry:
    """Dependency returning the process-wide registry, built on first use."""
    global _registry
    if _registry is None:
        _registry = build_default_registry()
    return _registry


def get_agent_tools() -> ToolRegistry:
    """Dependency returning the tools offered to the chat agent."""
    return get_tool_registry().subset(DEFAULT_AGENT_TOOLS)
