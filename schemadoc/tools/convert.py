# schemadoc/tools/convert.py
"""MCP convert tool implementation."""

from mcp.server.fastmcp import FastMCP
from schemadoc.services.schema import SchemaService
from schemadoc.utils.exceptions import SchemaDocError
from typing import Optional


def register_convert_tool(
    mcp: FastMCP,
    schema_service: SchemaService
) -> None:
    """Register the convert tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        schema_service: The schema service instance.
    """

    @mcp.tool()
    async def convert_schema(
        target_dialect: str,
        schema_text: Optional[str] = None,
        source_dialect: Optional[str] = None,
        schema: Optional[dict] = None
    ) -> dict:
        """
        Convert a schema to SQL, Prisma, or Drizzle source.

        Pass either schema source (with its dialect) or a normalized schema
        as returned by parse_schema.

        Args:
            target_dialect: Output dialect, one of "sql", "prisma", "drizzle".
            schema_text: Schema source to convert.
            source_dialect: Dialect of schema_text.
            schema: Normalized schema JSON, used when schema_text is omitted.

        Returns:
            The generated source.
        """
        try:
            if schema_text is not None:
                normalized = schema_service.require_schema(schema_text, source_dialect)
            elif schema is not None:
                normalized = schema_service.load_schema(schema)
            else:
                return {
                    "status": "error",
                    "error": "Either schema_text or schema is required"
                }

            output = schema_service.convert(normalized, target_dialect)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "target_dialect": target_dialect,
            "output": output,
            "tables_count": normalized.table_count
        }
