# schemadoc/config.py
"""Configuration management for schemadoc."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Parsing configuration
    default_dialect: str = "sql"
    allowed_dialects: str = Field(
        default="sql,prisma,drizzle",
        description="Comma-separated list of accepted schema dialects"
    )
    max_input_bytes: int = 1_000_000

    # Generation configuration
    sql_output_dialect: str = "postgres"

    # Review configuration
    large_table_threshold: int = 30

    # Observability configuration
    log_level: str = "INFO"

    # MCP configuration
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8989
    mcp_transport: str = "sse"

    class Config:
        env_prefix = "SCHEMADOC_"

    def get_allowed_dialects(self) -> List[str]:
        """Parse accepted dialects from the comma-separated setting.

        Returns:
            Lower-cased dialect names, empty entries dropped.
        """
        return [
            d.strip().lower()
            for d in self.allowed_dialects.split(",")
            if d.strip()
        ]

    def get_sql_output_dialect(self) -> Optional[str]:
        """Get the sqlglot dialect for generated SQL.

        Returns:
            The dialect name, or None for the native PostgreSQL output.
        """
        dialect = self.sql_output_dialect.strip().lower()
        if not dialect or dialect in ("postgres", "postgresql"):
            return None
        return dialect
