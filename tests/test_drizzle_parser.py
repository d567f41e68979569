# tests/test_drizzle_parser.py
"""Tests for the Drizzle table-builder parser."""

from schemadoc.models.parsing import Dialect, ParseStatus
from schemadoc.models.schema import RelationType
from schemadoc.services import drizzle_parser
from schemadoc.services.drizzle_parser import parse_drizzle
from schemadoc.utils.constants import NO_RELATIONS_WARNING, NO_TABLES_DRIZZLE


class TestParseDrizzleTables:
    """Table and column extraction tests."""

    def test_blog_schema(self, blog_drizzle):
        """Test tables are named by their pgTable string argument."""
        result = parse_drizzle(blog_drizzle)
        assert result.status == ParseStatus.SUCCESS
        assert result.input_type == Dialect.DRIZZLE
        assert list(result.normalized_schema.tables) == ["users", "posts"]

    def test_columns_and_modifiers(self, blog_drizzle):
        """Test builders and chained modifiers."""
        users = parse_drizzle(blog_drizzle).normalized_schema.tables["users"]
        assert list(users.columns) == ["id", "email", "createdAt"]
        assert users.columns["id"].type == "uuid"
        assert users.columns["id"].primary is True
        assert users.columns["id"].nullable is False
        assert users.columns["id"].default == "gen_random_uuid()"
        assert users.columns["email"].unique is True
        assert users.columns["email"].nullable is False
        assert users.columns["createdAt"].type == "timestamp"
        assert users.columns["createdAt"].default == "now()"

    def test_nullable_scenario(self, blog_drizzle):
        """Test columns are nullable unless notNull() or primaryKey()."""
        posts = parse_drizzle(blog_drizzle).normalized_schema.tables["posts"]
        assert posts.columns["age"].nullable is True
        assert posts.columns["user_id"].nullable is False
        assert posts.columns["id"].nullable is False

    def test_multiline_definition(self, blog_drizzle):
        """Test a modifier chain continued on the next line is applied."""
        posts = parse_drizzle(blog_drizzle).normalized_schema.tables["posts"]
        assert posts.columns["user_id"].type == "uuid"
        assert posts.columns["user_id"].nullable is False

    def test_index_callback(self, blog_drizzle):
        """Test indexes declared in the third pgTable argument."""
        posts = parse_drizzle(blog_drizzle).normalized_schema.tables["posts"]
        assert [(i.name, i.columns, i.unique) for i in posts.indexes] == [
            ("posts_user_idx", ["user_id"], False)
        ]

    def test_composite_primary_key(self):
        """Test primaryKey({ columns: [...] }) in the callback."""
        result = parse_drizzle("""
        export const members = pgTable("members", {
          orgId: integer("org_id").notNull(),
          userId: integer("user_id").notNull(),
        }, (t) => ({
          pk: primaryKey({ columns: [t.orgId, t.userId] }),
          roleIdx: uniqueIndex("members_user_key").on(t.userId),
        }));
        """)
        table = result.normalized_schema.tables["members"]
        assert table.primary_columns() == ["orgId", "userId"]
        assert [(i.name, i.unique) for i in table.indexes] == [("members_user_key", True)]

    def test_varchar_maps_to_text(self):
        """Test varchar builders normalize to text."""
        result = parse_drizzle(
            'export const tags = pgTable("tags", { label: varchar("label", { length: 40 }) });'
        )
        assert result.normalized_schema.tables["tags"].columns["label"].type == "text"

    def test_unknown_builder_passes_through(self):
        """Test builders outside the vocabulary keep their name."""
        result = parse_drizzle(
            'export const m = pgTable("m", { amount: numeric("amount") });'
        )
        assert result.normalized_schema.tables["m"].columns["amount"].type == "numeric"

    def test_other_table_builders(self):
        """Test mysqlTable and sqliteTable definitions are accepted."""
        result = parse_drizzle(
            'export const a = mysqlTable("a", { id: int("id").primaryKey() });\n'
            'export const b = sqliteTable("b", { id: integer("id").primaryKey() });'
        )
        assert list(result.normalized_schema.tables) == ["a", "b"]
        assert result.normalized_schema.tables["a"].columns["id"].type == "integer"


class TestParseDrizzleRelations:
    """Naming-based relation inference tests."""

    def test_plural_table_preferred(self, blog_drizzle):
        """Test user_id points at the users table."""
        tables = parse_drizzle(blog_drizzle).normalized_schema.tables
        assert tables["posts"].columns["user_id"].foreign_key == "users.id"
        assert [(r.type, r.to) for r in tables["posts"].relations] == [
            (RelationType.MANY_TO_ONE, "users.id")
        ]
        assert [(r.type, r.to) for r in tables["users"].relations] == [
            (RelationType.ONE_TO_MANY, "posts.user_id")
        ]

    def test_singular_table_fallback(self):
        """Test the bare stem is tried when no plural table exists."""
        result = parse_drizzle("""
        export const team = pgTable("team", { id: serial("id").primaryKey() });
        export const player = pgTable("player", { id: serial("id").primaryKey(), teamId: integer("team_id") });
        """)
        player = result.normalized_schema.tables["player"]
        assert player.columns["teamId"].foreign_key == "team.id"


class TestParseDrizzleErrors:
    """Error policy tests."""

    def test_no_tables(self):
        """Test source without pgTable fails with the expected-format message."""
        result = parse_drizzle("export const x = 1;")
        assert result.status == ParseStatus.ERROR
        assert result.errors == [NO_TABLES_DRIZZLE]

    def test_no_relations_warning(self):
        """Test a single table succeeds with the no-relations warning."""
        result = parse_drizzle('export const t = pgTable("t", { id: serial("id").primaryKey() });')
        assert result.status == ParseStatus.SUCCESS
        assert NO_RELATIONS_WARNING in result.warnings

    def test_internal_failure(self, monkeypatch):
        """Test an unexpected exception is reported with the parser prefix."""
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(drizzle_parser, "_parse_table", explode)
        result = parse_drizzle('export const t = pgTable("t", { id: serial("id").primaryKey() });')
        assert result.status == ParseStatus.ERROR
        assert result.errors == ["Parser error: boom"]
        assert result.ok is False
