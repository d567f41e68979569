"""Data models for schemadoc."""

from schemadoc.models.schema import (
    RelationType,
    Column,
    Index,
    Relation,
    Table,
    NormalizedSchema,
)
from schemadoc.models.parsing import (
    Dialect,
    ParseStatus,
    ParsingStats,
    ParsingResult,
)
from schemadoc.models.changes import (
    ChangeType,
    Change,
)
from schemadoc.models.review import (
    Severity,
    Finding,
    ReviewResults,
)
from schemadoc.models.version import (
    IngestStatus,
    SchemaVersion,
    IngestOutcome,
)

__all__ = [
    "RelationType",
    "Column",
    "Index",
    "Relation",
    "Table",
    "NormalizedSchema",
    "Dialect",
    "ParseStatus",
    "ParsingStats",
    "ParsingResult",
    "ChangeType",
    "Change",
    "Severity",
    "Finding",
    "ReviewResults",
    "IngestStatus",
    "SchemaVersion",
    "IngestOutcome",
]
