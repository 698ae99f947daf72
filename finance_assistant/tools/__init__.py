"""Tool declarations and execution package."""

from finance_assistant.tools.definitions import TOOL_DEFINITIONS, LedgerTool
from finance_assistant.tools.executor import (
    ToolArgumentsError,
    ToolError,
    ToolExecutor,
    UnknownToolError,
)

__all__ = [
    "LedgerTool",
    "TOOL_DEFINITIONS",
    "ToolArgumentsError",
    "ToolError",
    "ToolExecutor",
    "UnknownToolError",
]
