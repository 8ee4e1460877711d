"""Static resource listing backed by the scenario listing tool."""

from __future__ import annotations

import logging
from typing import Any, List

from mcp import types
from mcp.server.lowlevel.helper_types import ReadResourceContents

from make_mcp.errors.canonical import UnknownResourceError
from make_mcp.server.formatting import JSON_MIME_TYPE, render_json
from make_mcp.server.tools import LIST_SCENARIOS_TOOL, ToolDispatcher

logger = logging.getLogger(__name__)

SCENARIOS_URI = "make://scenarios"

RESOURCES: List[types.Resource] = [
    types.Resource(
        uri=SCENARIOS_URI,
        name="Make.com scenarios",
        description="All available automation scenarios",
        mimeType=JSON_MIME_TYPE,
    )
]


def _normalise_uri(uri: Any) -> str:
    # AnyUrl may render a trailing slash for an empty path.
    return str(uri).rstrip("/")


class ResourceProvider:
    def __init__(self, dispatcher: ToolDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def resources(self) -> List[types.Resource]:
        return list(RESOURCES)

    async def read(self, uri: Any) -> List[ReadResourceContents]:
        """Return the contents of ``uri``.

        ``make://scenarios`` yields exactly the text of the ``list_scenarios``
        tool result; any other URI raises :class:`UnknownResourceError`.
        """
        if _normalise_uri(uri) != SCENARIOS_URI:
            raise UnknownResourceError(str(uri))
        logger.debug("reading resource %s", SCENARIOS_URI)
        payload = await self._dispatcher.dispatch(LIST_SCENARIOS_TOOL)
        return [ReadResourceContents(content=render_json(payload), mime_type=JSON_MIME_TYPE)]
