# schemadoc/tools/review.py
"""MCP review tool implementation."""

from mcp.server.fastmcp import FastMCP
from schemadoc.services.schema import SchemaService
from schemadoc.utils.exceptions import SchemaDocError
from typing import Optional


def register_review_tool(
    mcp: FastMCP,
    schema_service: SchemaService
) -> None:
    """Register the review tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        schema_service: The schema service instance.
    """

    @mcp.tool()
    async def review_schema(
        schema_text: str,
        dialect: Optional[str] = None
    ) -> dict:
        """
        Review a schema for missing keys, unindexed foreign keys and naming issues.

        Args:
            schema_text: Schema source.
            dialect: Source dialect, one of "sql", "prisma", "drizzle";
                defaults to the server default dialect.

        Returns:
            Findings grouped into critical, warnings and suggestions.
        """
        try:
            schema = schema_service.require_schema(schema_text, dialect)
            results = schema_service.analyze(schema)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "review": results.model_dump(mode="json"),
            "findings_count": results.total
        }
