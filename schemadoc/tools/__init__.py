"""MCP tools for schemadoc."""

from schemadoc.tools.parse import register_parse_tool
from schemadoc.tools.convert import register_convert_tool
from schemadoc.tools.diff import register_diff_tool
from schemadoc.tools.review import register_review_tool
from schemadoc.tools.versions import register_version_tools

__all__ = [
    "register_parse_tool",
    "register_convert_tool",
    "register_diff_tool",
    "register_review_tool",
    "register_version_tools",
]
