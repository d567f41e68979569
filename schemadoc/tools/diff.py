# schemadoc/tools/diff.py
"""MCP diff tool implementation."""

from mcp.server.fastmcp import FastMCP
from schemadoc.services.schema import SchemaService
from schemadoc.utils.exceptions import SchemaDocError
from typing import Optional


def register_diff_tool(
    mcp: FastMCP,
    schema_service: SchemaService
) -> None:
    """Register the diff tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        schema_service: The schema service instance.
    """

    @mcp.tool()
    async def diff_schemas(
        before_text: str,
        after_text: str,
        dialect: Optional[str] = None,
        after_dialect: Optional[str] = None
    ) -> dict:
        """
        Compare two schema sources and list the structural changes.

        Args:
            before_text: The older schema source.
            after_text: The newer schema source.
            dialect: Dialect of before_text (and of after_text by default).
            after_dialect: Dialect of after_text when it differs.

        Returns:
            Ordered table, column and relation changes.
        """
        try:
            before = schema_service.require_schema(before_text, dialect)
            after = schema_service.require_schema(after_text, after_dialect or dialect)
            changes = schema_service.diff(before, after)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "changes": [c.model_dump(mode="json") for c in changes],
            "changes_count": len(changes)
        }
