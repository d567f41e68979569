# schemadoc/tools/versions.py
"""MCP schema version tools."""

from mcp.server.fastmcp import FastMCP
from schemadoc.services.versions import SchemaVersionStore
from schemadoc.utils.exceptions import SchemaDocError
from typing import Optional


def register_version_tools(
    mcp: FastMCP,
    version_store: SchemaVersionStore
) -> None:
    """Register the version history tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        version_store: The schema version store.
    """

    @mcp.tool()
    async def ingest_schema(
        project_id: str,
        schema_text: str,
        dialect: Optional[str] = None
    ) -> dict:
        """
        Submit schema source as the next version of a project's schema.

        Unchanged resubmissions are detected and not stored; sources that fail
        to parse are rejected.

        Args:
            project_id: Project identifier.
            schema_text: Schema source.
            dialect: Source dialect, one of "sql", "prisma", "drizzle";
                defaults to the server default dialect.

        Returns:
            The ingest status, the version number and the changes from the
            previous version.
        """
        try:
            outcome = version_store.ingest(project_id, schema_text, dialect)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "data": outcome.model_dump(mode="json", by_alias=True)
        }

    @mcp.tool()
    async def list_versions(project_id: str) -> dict:
        """
        List the stored schema versions of a project.

        Args:
            project_id: Project identifier.

        Returns:
            Version summaries, oldest first.
        """
        versions = version_store.list_versions(project_id)
        return {
            "status": "success",
            "project_id": project_id,
            "versions": [
                {
                    "version": v.version,
                    "dialect": v.dialect.value,
                    "schema_hash": v.schema_hash,
                    "created_at": v.created_at.isoformat(),
                    "tables_count": v.normalized_schema.table_count,
                    "changes_count": len(v.changes)
                }
                for v in versions
            ]
        }

    @mcp.tool()
    async def diff_versions(
        project_id: str,
        from_version: int,
        to_version: Optional[int] = None
    ) -> dict:
        """
        Compare two stored versions of a project's schema.

        Args:
            project_id: Project identifier.
            from_version: The older version number.
            to_version: The newer version number; defaults to the latest.

        Returns:
            Ordered table, column and relation changes.
        """
        try:
            changes = version_store.diff_versions(project_id, from_version, to_version)
        except SchemaDocError as e:
            return e.to_dict()

        return {
            "status": "success",
            "changes": [c.model_dump(mode="json") for c in changes],
            "changes_count": len(changes)
        }
