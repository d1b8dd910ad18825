"""
Tool Registry
-------------
JSON schema tool definitions paired with async executors.
Each tool is unit-testable without an LLM or a network.

Every execution goes through Tool.execute, which turns the remote
envelope, or any exception, into a flat result envelope.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional
import time

from ..core.envelope import RemoteEnvelope, ToolResult
from ..core.errors import AurexError, classify_exception
from ..infra.logging import CallContext, get_logger

logger = get_logger("tools")


class PermissionLevel(str, Enum):
    """Permission levels for tools."""
    READ = "read"     # No side effects
    WRITE = "write"   # Creates or moves funds


class ParameterType(str, Enum):
    """Supported parameter types."""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: ParameterType
    description: str
    required: bool = True
    enum: Optional[List[Any]] = None  # Allowed values

    def to_json_schema(self) -> Dict:
        """Convert to JSON Schema format."""
        schema = {
            "type": self.type.value,
            "description": self.description
        }

        if self.enum:
            schema["enum"] = list(self.enum)

        return schema


@dataclass(frozen=True)
class ToolSchema:
    """JSON Schema for tool parameters."""
    parameters: List[ToolParameter] = field(default_factory=list)

    @property
    def required(self) -> List[str]:
        return [param.name for param in self.parameters if param.required]

    def to_json_schema(self) -> Dict:
        """Convert to full JSON Schema."""
        return {
            "type": "object",
            "properties": {param.name: param.to_json_schema() for param in self.parameters},
            "required": self.required,
        }

    def to_openai_function(self, name: str, description: str) -> Dict:
        """Convert to OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": self.to_json_schema()
            }
        }

    def to_anthropic_tool(self, name: str, description: str) -> Dict:
        """Convert to Anthropic tool use format."""
        return {
            "name": name,
            "description": description,
            "input_schema": self.to_json_schema()
        }


RequestFn = Callable[[Dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    """
    Tool definition with schema and executor.

    Each tool defines:
    - Name and description
    - JSON schema for parameters
    - Permission level and category
    - The single HTTP request it performs
    """
    name: str
    description: str
    schema: ToolSchema
    permission: PermissionLevel
    request: RequestFn
    category: str = "general"

    @property
    def parameters(self) -> Dict:
        return self.schema.to_json_schema()

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run the request and normalize the outcome.

        Never raises: remote rejections and local failures both come back
        as ``{"success": False, "error": ...}``.
        """
        with CallContext():
            start = time.perf_counter()
            logger.debug(f"Executing tool: {self.name}", extra={"tool_name": self.name})

            try:
                remote = RemoteEnvelope.parse(await self.request(args))
            except Exception as e:
                return self._fail(classify_exception(e, self.name), start)

            if not remote.success:
                return self._fail(AurexError.remote(remote.error, self.name), start)

            logger.info(
                f"Tool completed: {self.name}",
                extra={"tool_name": self.name, "success": True,
                       "execution_time_ms": _elapsed_ms(start)},
            )
            return ToolResult.ok(remote.data).to_dict()

    def _fail(self, error: AurexError, start: float) -> Dict[str, Any]:
        logger.log(
            error.log_level,
            f"Tool failed: {self.name} ({error.category.name}): {error.message}",
            extra={"tool_name": self.name, "success": False,
                   "error_category": error.category.name,
                   "execution_time_ms": _elapsed_ms(start)},
        )
        return ToolResult.fail(error).to_dict()

    def as_dict(self) -> Dict[str, Any]:
        """The ``{description, parameters, execute}`` triple agent frameworks consume."""
        return {
            "description": self.description,
            "parameters": self.parameters,
            "execute": self.execute,
        }

    def __repr__(self) -> str:
        return f"Tool(name={self.name}, permission={self.permission.value})"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class ToolRegistry:
    """
    Fixed mapping of tool name to Tool.

    Populated once at construction; read-only afterwards.
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool. Names must be unique."""
        if tool.name in self._tools:
            raise ValueError(f"Tool with name '{tool.name}' is already registered")

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name} ({tool.permission.value})")

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> List[Tool]:
        """List all registered tools."""
        return list(self._tools.values())

    def list_by_category(self, category: str) -> List[Tool]:
        """List tools by category."""
        return [t for t in self._tools.values() if t.category == category]

    def list_by_permission(self, permission: PermissionLevel) -> List[Tool]:
        """List tools by permission level."""
        return [t for t in self._tools.values() if t.permission == permission]

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        """Plain ``{name: {description, parameters, execute}}`` mapping."""
        return {name: tool.as_dict() for name, tool in self._tools.items()}

    def get_schemas_for_llm(self) -> List[Dict]:
        """Get all tool schemas in OpenAI function format."""
        return [
            tool.schema.to_openai_function(tool.name, tool.description)
            for tool in self._tools.values()
        ]

    def get_anthropic_tools(self) -> List[Dict]:
        """Get all tool schemas in Anthropic tool use format."""
        return [
            tool.schema.to_anthropic_tool(tool.name, tool.description)
            for tool in self._tools.values()
        ]

    async def execute(self, name: str, args: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch a tool call by name."""
        tool = self.get(name)
        if tool is None:
            logger.warning(f"Unknown tool: {name}")
            return ToolResult(success=False, error=f"Unknown tool: {name}").to_dict()
        return await tool.execute(args)

    def __getitem__(self, name: str) -> Tool:
        return self._tools[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
