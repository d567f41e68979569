# schemadoc/tools/parse.py
"""MCP parse tool implementation."""

from mcp.server.fastmcp import FastMCP
from schemadoc.services.schema import SchemaService
from schemadoc.utils.exceptions import SchemaDocError
from typing import Optional


def register_parse_tool(
    mcp: FastMCP,
    schema_service: SchemaService
) -> None:
    """Register the parse tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        schema_service: The schema service instance.
    """

    @mcp.tool()
    async def parse_schema(
        schema_text: str,
        dialect: Optional[str] = None
    ) -> dict:
        """
        Parse schema source into the normalized table/column/relation model.

        Args:
            schema_text: SQL DDL, Prisma schema, or Drizzle table definitions.
            dialect: Source dialect, one of "sql", "prisma", "drizzle";
                defaults to the server default dialect.

        Returns:
            The parsing result with status, errors, warnings, schema and stats.
        """
        try:
            result = schema_service.parse(schema_text, dialect)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "result": result.model_dump(mode="json", by_alias=True)
        }
