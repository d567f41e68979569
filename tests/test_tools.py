# tests/test_tools.py
"""Tests for the MCP tool layer."""

import pytest
from mcp.server.fastmcp import FastMCP

from schemadoc.config import Settings
from schemadoc.main import create_mcp_app


def _tool(mcp: FastMCP, name: str):
    """Return the coroutine function registered under a tool name."""
    return mcp._tool_manager.get_tool(name).fn


class TestToolRegistration:
    """Tool registration tests."""

    @pytest.mark.asyncio
    async def test_all_tools_registered(self):
        """Test every tool is exposed by the app."""
        mcp = create_mcp_app(Settings())
        names = {tool.name for tool in await mcp.list_tools()}
        assert names == {
            "parse_schema",
            "convert_schema",
            "diff_schemas",
            "review_schema",
            "ingest_schema",
            "list_versions",
            "diff_versions",
        }


class TestSchemaTools:
    """Parse, convert, diff and review tool tests."""

    def setup_method(self):
        """Set up an app with a small input limit."""
        self.mcp = create_mcp_app(Settings(max_input_bytes=4096))

    @pytest.mark.asyncio
    async def test_parse_schema(self, blog_sql):
        """Test the parse result is returned in its JSON shape."""
        response = await _tool(self.mcp, "parse_schema")(schema_text=blog_sql, dialect="sql")
        assert response["status"] == "success"
        result = response["result"]
        assert result["status"] == "success"
        assert result["stats"]["relation_count"] == 2
        assert result["schema"]["tables"]["posts"]["relations"][0]["from"] == "posts.user_id"

    @pytest.mark.asyncio
    async def test_parse_schema_errors_reported_in_result(self):
        """Test parse failures are data, not tool errors."""
        response = await _tool(self.mcp, "parse_schema")(schema_text="nothing", dialect="prisma")
        assert response["status"] == "success"
        assert response["result"]["status"] == "error"

    @pytest.mark.asyncio
    async def test_parse_schema_unsupported_dialect(self):
        """Test service errors use the coded error envelope."""
        response = await _tool(self.mcp, "parse_schema")(schema_text="x", dialect="yaml")
        assert response["status"] == "error"
        assert response["error"]["code"] == "ERR_002"

    @pytest.mark.asyncio
    async def test_parse_schema_too_large(self):
        """Test oversized input is refused."""
        response = await _tool(self.mcp, "parse_schema")(schema_text="x" * 5000, dialect="sql")
        assert response["error"]["code"] == "ERR_003"

    @pytest.mark.asyncio
    async def test_convert_schema_from_text(self, blog_prisma):
        """Test converting Prisma source to SQL."""
        response = await _tool(self.mcp, "convert_schema")(
            target_dialect="sql", schema_text=blog_prisma, source_dialect="prisma"
        )
        assert response["status"] == "success"
        assert "CREATE TABLE user (" in response["output"]
        assert response["tables_count"] == 2

    @pytest.mark.asyncio
    async def test_convert_schema_from_json(self, blog_sql):
        """Test converting a normalized schema payload."""
        parsed = await _tool(self.mcp, "parse_schema")(schema_text=blog_sql)
        response = await _tool(self.mcp, "convert_schema")(
            target_dialect="drizzle", schema=parsed["result"]["schema"]
        )
        assert response["status"] == "success"
        assert 'export const posts = pgTable("posts", {' in response["output"]

    @pytest.mark.asyncio
    async def test_convert_schema_invalid_payload(self):
        """Test invalid schema payloads are rejected."""
        response = await _tool(self.mcp, "convert_schema")(
            target_dialect="sql", schema={"tables": {"t": {"columns": {"a": {}}}}}
        )
        assert response["error"]["code"] == "ERR_005"

    @pytest.mark.asyncio
    async def test_convert_schema_requires_input(self):
        """Test a source is required."""
        response = await _tool(self.mcp, "convert_schema")(target_dialect="sql")
        assert response["status"] == "error"

    @pytest.mark.asyncio
    async def test_convert_schema_parse_failure(self):
        """Test unparseable source yields the parse error code."""
        response = await _tool(self.mcp, "convert_schema")(
            target_dialect="prisma", schema_text="SELECT 1;"
        )
        assert response["error"]["code"] == "ERR_004"

    @pytest.mark.asyncio
    async def test_diff_schemas(self):
        """Test diffing two SQL sources."""
        response = await _tool(self.mcp, "diff_schemas")(
            before_text="CREATE TABLE users (id uuid PRIMARY KEY, email text);",
            after_text="CREATE TABLE users (id uuid PRIMARY KEY, email text NOT NULL);"
        )
        assert response["status"] == "success"
        assert response["changes_count"] == 1
        assert response["changes"][0]["change_type"] == "column_modified"

    @pytest.mark.asyncio
    async def test_diff_schemas_across_dialects(self, blog_drizzle):
        """Test the after source may use another dialect."""
        response = await _tool(self.mcp, "diff_schemas")(
            before_text="CREATE TABLE users (id uuid PRIMARY KEY);",
            after_text=blog_drizzle,
            after_dialect="drizzle"
        )
        assert response["status"] == "success"
        kinds = [c["change_type"] for c in response["changes"]]
        assert kinds[0] == "table_added"

    @pytest.mark.asyncio
    async def test_review_schema(self):
        """Test review findings are grouped."""
        response = await _tool(self.mcp, "review_schema")(
            schema_text="CREATE TABLE logs (message text);"
        )
        assert response["status"] == "success"
        assert response["review"]["critical"][0]["issue"] == "Missing primary key"
        assert response["findings_count"] == 1


class TestVersionTools:
    """Version history tool tests."""

    def setup_method(self):
        """Set up a fresh app and store."""
        self.mcp = create_mcp_app(Settings())

    @pytest.mark.asyncio
    async def test_ingest_and_list(self):
        """Test ingesting two versions and listing them."""
        ingest = _tool(self.mcp, "ingest_schema")
        first = await ingest(project_id="p", schema_text="CREATE TABLE a (id int PRIMARY KEY);")
        second = await ingest(project_id="p", schema_text="CREATE TABLE a (id int PRIMARY KEY, b int);")
        assert first["data"]["status"] == "created"
        assert second["data"]["version"] == 2
        assert second["data"]["changes"][0]["entity_name"] == "a.b"

        listing = await _tool(self.mcp, "list_versions")(project_id="p")
        assert [v["version"] for v in listing["versions"]] == [1, 2]
        assert listing["versions"][1]["changes_count"] == 1

    @pytest.mark.asyncio
    async def test_ingest_rejected(self):
        """Test rejected submissions report the parse errors."""
        response = await _tool(self.mcp, "ingest_schema")(project_id="p", schema_text="nope")
        assert response["status"] == "success"
        assert response["data"]["status"] == "rejected"
        assert response["data"]["result"]["errors"] == ["No tables found in input."]

    @pytest.mark.asyncio
    async def test_diff_versions(self):
        """Test diffing stored versions and a missing version."""
        ingest = _tool(self.mcp, "ingest_schema")
        await ingest(project_id="p", schema_text="CREATE TABLE a (id int PRIMARY KEY);")
        await ingest(project_id="p", schema_text="CREATE TABLE b (id int PRIMARY KEY);")

        diff_versions = _tool(self.mcp, "diff_versions")
        response = await diff_versions(project_id="p", from_version=1)
        assert [c["entity_name"] for c in response["changes"]] == ["b", "a"]

        missing = await diff_versions(project_id="p", from_version=7)
        assert missing["error"]["code"] == "ERR_006"
