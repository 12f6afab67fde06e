"""Agent tools and their registry."""
from seaward.tools.registry import (
    Tool,
    ToolRegistry,
    build_default_registry,
    get_agent_tools,
    get_tool_registry,
)

__all__ = ["Tool", "ToolRegistry", "build_default_registry", "get_agent_tools", "get_tool_registry"]
