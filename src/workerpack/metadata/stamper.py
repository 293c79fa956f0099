# src/workerpack/metadata/stamper.py
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from workerpack.metadata.revision import (
    RevisionLookupFailure,
    RevisionProvider,
    revision_or_unknown,
)
from workerpack.schemas.build import BuildArtifact

logger = logging.getLogger(__name__)

TS_NOCHECK = "// @ts-nocheck"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a ``Z`` suffix.
    """
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_banner(timestamp: str, revision: str, version: str) -> str:
    return f"// Build: {timestamp} | Commit: {revision} | Version: {version}"


class MetadataStamper:
    """
    Prepends the build banner and the ts-nocheck directive to bundled source.
    """

    def __init__(
        self,
        version: str,
        revision_provider: RevisionProvider,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.version = version
        self.revision_provider = revision_provider
        self.clock = clock or utc_now

    def resolve_revision(self) -> str:
        result = self.revision_provider.lookup()
        if isinstance(result, RevisionLookupFailure):
            logger.warning("Revision lookup failed, using 'unknown': %s", result.reason)
        return revision_or_unknown(result)

    def stamp(self, bundled_source: str) -> BuildArtifact:
        timestamp = iso_timestamp(self.clock())
        revision = self.resolve_revision()
        header = build_banner(timestamp, revision, self.version) + "\n" + TS_NOCHECK + "\n"

        return BuildArtifact(
            source_code=header + bundled_source,
            timestamp=timestamp,
            revision=revision,
            version=self.version,
        )
