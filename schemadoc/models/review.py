# schemadoc/models/review.py
"""Schema review models."""

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Finding severity enumeration."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Finding(BaseModel):
    """A single review finding."""

    entity: str
    issue: str
    impact: str
    severity: Severity


class ReviewResults(BaseModel):
    """Review findings grouped by bucket."""

    critical: list[Finding] = Field(default_factory=list)
    warnings: list[Finding] = Field(default_factory=list)
    suggestions: list[Finding] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.critical) + len(self.warnings) + len(self.suggestions)
