"""Render tool payloads into MCP content."""

from __future__ import annotations

import json
from typing import Any, List

from mcp import types

JSON_MIME_TYPE = "application/json"


def render_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def text_content(payload: Any) -> List[types.TextContent]:
    """Wrap ``payload`` as the single text item of a tool result."""
    return [types.TextContent(type="text", text=render_json(payload))]
