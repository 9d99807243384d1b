"""
Tool layer: named operations with validated arguments and structured results.
"""

from .registry import TOOLS, Tool, ToolContext, call_tool, tool
from .schemas import ToolResult
from . import handlers  # noqa: F401  (registers the tools)

__all__ = [
    "TOOLS",
    "Tool",
    "ToolContext",
    "ToolResult",
    "call_tool",
    "tool",
]
