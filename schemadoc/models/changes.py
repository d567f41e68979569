# schemadoc/models/changes.py
"""Schema change models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeType(str, Enum):
    """Change type enumeration, listed in emission order."""

    TABLE_ADDED = "table_added"
    TABLE_REMOVED = "table_removed"
    COLUMN_ADDED = "column_added"
    COLUMN_REMOVED = "column_removed"
    COLUMN_MODIFIED = "column_modified"
    RELATION_ADDED = "relation_added"
    RELATION_REMOVED = "relation_removed"


class Change(BaseModel):
    """A single structural difference between two schema snapshots."""

    change_type: ChangeType
    entity_name: str
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
