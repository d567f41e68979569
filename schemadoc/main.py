# schemadoc/main.py
"""Main entry point for the schemadoc server."""

import argparse
import asyncio
import logging
from mcp.server.fastmcp import FastMCP

from schemadoc.config import Settings
from schemadoc.services.schema import SchemaService
from schemadoc.services.versions import SchemaVersionStore
from schemadoc.tools.convert import register_convert_tool
from schemadoc.tools.diff import register_diff_tool
from schemadoc.tools.parse import register_parse_tool
from schemadoc.tools.review import register_review_tool
from schemadoc.tools.versions import register_version_tools


logger = logging.getLogger("schemadoc")


def create_mcp_app(settings: Settings) -> FastMCP:
    """Create and configure the MCP application.

    Args:
        settings: Application settings.

    Returns:
        Configured FastMCP instance with every tool registered.
    """
    mcp = FastMCP("schemadoc", host=settings.mcp_host, port=settings.mcp_port)

    schema_service = SchemaService(
        allowed_dialects=settings.get_allowed_dialects(),
        default_dialect=settings.default_dialect,
        max_input_bytes=settings.max_input_bytes,
        sql_output_dialect=settings.get_sql_output_dialect(),
        large_table_threshold=settings.large_table_threshold
    )
    version_store = SchemaVersionStore(schema_service)

    _register_tools(mcp, schema_service, version_store)
    return mcp


def _register_tools(
    mcp: FastMCP,
    schema_service: SchemaService,
    version_store: SchemaVersionStore
) -> None:
    """Register all MCP tools.

    Args:
        mcp: The FastMCP instance.
        schema_service: Schema service.
        version_store: Schema version store.
    """
    register_parse_tool(mcp, schema_service)
    register_convert_tool(mcp, schema_service)
    register_diff_tool(mcp, schema_service)
    register_review_tool(mcp, schema_service)
    register_version_tools(mcp, version_store)


def main() -> None:
    """Main entry point for the server."""
    parser = argparse.ArgumentParser(description="Schema documentation MCP Server")
    parser.add_argument(
        "--host",
        type=str,
        help="Host to bind the SSE server to"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to bind the SSE server to"
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["sse", "stdio"],
        help="MCP transport"
    )
    parser.add_argument(
        "--sql-dialect",
        type=str,
        help="sqlglot dialect for generated SQL (default: postgres)"
    )

    args = parser.parse_args()

    # Load settings
    settings = Settings()
    if args.host:
        settings.mcp_host = args.host
    if args.port:
        settings.mcp_port = args.port
    if args.transport:
        settings.mcp_transport = args.transport
    if args.sql_dialect:
        settings.sql_output_dialect = args.sql_dialect

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    logger.info("Starting schemadoc server initialization")
    asyncio.run(run_server(settings))


async def run_server(settings: Settings) -> None:
    """Run the MCP server.

    Args:
        settings: Application settings.
    """
    logger.info("settings: %s", settings.model_dump())

    mcp = create_mcp_app(settings)

    logger.info("schemadoc server ready; starting %s transport", settings.mcp_transport)

    if settings.mcp_transport == "stdio":
        await mcp.run_stdio_async()
    else:
        await mcp.run_sse_async()


if __name__ == "__main__":
    main()
