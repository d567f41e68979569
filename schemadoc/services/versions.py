# schemadoc/services/versions.py
"""In-memory schema version history."""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from schemadoc.models.changes import Change
from schemadoc.models.version import IngestOutcome, IngestStatus, SchemaVersion
from schemadoc.services.differ import diff_schemas
from schemadoc.services.schema import SchemaService, schema_hash
from schemadoc.utils.exceptions import VersionNotFoundError

logger = logging.getLogger("version-store")


class SchemaVersionStore:
    """Per-project history of accepted schema snapshots.

    Versions are numbered from 1 and never modified. A submission is
    stored only when it parses without errors and its canonical hash differs
    from the latest version; each stored version carries the diff against
    its predecessor.
    """

    def __init__(self, schema_service: SchemaService):
        self.schema_service = schema_service
        self._versions: dict[str, list[SchemaVersion]] = {}
        self._lock = threading.Lock()

    def ingest(self, project_id: str, text: str, dialect: Optional[str] = None) -> IngestOutcome:
        """Parse and store a schema submission.

        Args:
            project_id: Owning project.
            text: Schema source.
            dialect: Source dialect; None selects the service default.

        Returns:
            The outcome: ``created`` with the new version number,
            ``no_changes`` with the latest version number, or ``rejected``.

        Raises:
            UnsupportedDialectError: If the dialect is not accepted.
            InputTooLargeError: If the source exceeds the size limit.
        """
        result = self.schema_service.parse(text, dialect)
        if not result.ok:
            logger.warning(
                "Rejected schema for project %s: %s", project_id, "; ".join(result.errors)
            )
            return IngestOutcome(status=IngestStatus.REJECTED, result=result)

        schema = result.normalized_schema
        digest = schema_hash(schema)

        with self._lock:
            history = self._versions.setdefault(project_id, [])
            previous = history[-1] if history else None

            if previous is not None and previous.schema_hash == digest:
                logger.info(
                    "Schema for project %s unchanged since version %d",
                    project_id, previous.version,
                )
                return IngestOutcome(
                    status=IngestStatus.NO_CHANGES,
                    version=previous.version,
                    result=result,
                )

            changes: list[Change] = []
            if previous is not None:
                changes = diff_schemas(previous.normalized_schema, schema)

            version = SchemaVersion(
                project_id=project_id,
                version=len(history) + 1,
                dialect=result.input_type,
                raw_schema=text,
                schema=schema,
                schema_hash=digest,
                created_at=datetime.now(timezone.utc),
                changes=changes,
            )
            history.append(version)

        logger.info(
            "Stored version %d for project %s (%d changes)",
            version.version, project_id, len(changes),
        )
        return IngestOutcome(
            status=IngestStatus.CREATED,
            version=version.version,
            result=result,
            changes=changes,
        )

    def list_versions(self, project_id: str) -> list[SchemaVersion]:
        with self._lock:
            return list(self._versions.get(project_id, []))

    def latest(self, project_id: str) -> SchemaVersion:
        """Get the most recent version.

        Raises:
            VersionNotFoundError: If the project has no versions.
        """
        with self._lock:
            history = self._versions.get(project_id)
            if not history:
                raise VersionNotFoundError(project_id)
            return history[-1]

    def get_version(self, project_id: str, version: int) -> SchemaVersion:
        """Get one version by number.

        Raises:
            VersionNotFoundError: If the version does not exist.
        """
        with self._lock:
            history = self._versions.get(project_id, [])
            if version < 1 or version > len(history):
                raise VersionNotFoundError(project_id, version)
            return history[version - 1]

    def diff_versions(
        self,
        project_id: str,
        from_version: int,
        to_version: Optional[int] = None,
    ) -> list[Change]:
        """Diff two stored versions; ``to_version`` defaults to the latest."""
        before = self.get_version(project_id, from_version)
        after = (
            self.latest(project_id)
            if to_version is None
            else self.get_version(project_id, to_version)
        )
        return diff_schemas(before.normalized_schema, after.normalized_schema)
