# Tools module - Tool registry and the Aurex tool set
# Each tool: name, JSON schema, permission, async executor

from .registry import ToolRegistry, Tool, ToolSchema, ToolParameter, ParameterType, PermissionLevel
from .aurex_tools import create_aurex_tools

__all__ = [
    "ToolRegistry",
    "Tool",
    "ToolSchema",
    "ToolParameter",
    "ParameterType",
    "PermissionLevel",
    "create_aurex_tools",
]
