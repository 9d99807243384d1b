"""
Named-tool registry and dispatch.

A transport hands ``call_tool`` a tool name and a dict of arguments and gets
a ``ToolResult`` back. Failures never escape as exceptions: bad arguments,
missing records and storage errors all come back as ``ok=False`` results
naming the operation.

File: tools/registry.py
Created: 2026-10-18
Last Modified: 2026-10-18
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

import aiosqlite
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import CRMError, UnknownToolError
from .schemas import ToolResult

log = logging.getLogger(__name__)

Handler = Callable[["ToolContext", Any], Awaitable[ToolResult]]


@dataclass
class ToolContext:
    """Process-wide state shared by every tool call."""

    conn: aiosqlite.Connection
    settings: Settings


@dataclass
class Tool:
    name: str
    action: str
    description: str
    args_model: Type[BaseModel]
    handler: Handler


TOOLS: Dict[str, Tool] = {}


def tool(name: str, args_model: Type[BaseModel], *, action: str, description: str):
    """Register a coroutine as the handler for ``name``."""

    def decorator(fn: Handler) -> Handler:
        TOOLS[name] = Tool(
            name=name,
            action=action,
            description=description,
            args_model=args_model,
            handler=fn,
        )
        return fn

    return decorator


async def call_tool(
    context: ToolContext, name: str, arguments: Optional[Mapping[str, Any]] = None
) -> ToolResult:
    """Validate ``arguments`` for tool ``name`` and run it."""
    entry = TOOLS.get(name)
    if entry is None:
        return ToolResult.failure(str(UnknownToolError(name)))

    try:
        args = entry.args_model.model_validate(dict(arguments or {}))
    except ValidationError as e:
        return ToolResult.failure(f"Invalid arguments for {name}: {e}")

    try:
        return await entry.handler(context, args)
    except CRMError as e:
        log.error(f"{name} failed: {e}")
        return ToolResult.failure(
            f"Failed to {entry.action}: {e}",
            data={"operation": e.operation or name, "identity": e.identity},
        )
    except (aiosqlite.Error, OSError) as e:
        log.exception(f"{name} failed with a storage error")
        return ToolResult.failure(
            f"Failed to {entry.action}: {e}",
            data={"operation": name},
        )
