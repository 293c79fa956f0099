# src/workerpack/metadata/revision.py
"""
Best-effort source revision lookup.

Providers return either a revision string or a RevisionLookupFailure value.
They never raise for lookup problems.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

UNKNOWN_REVISION = "unknown"


@dataclass(frozen=True)
class RevisionLookupFailure:
    """Explicit "revision unavailable" signal."""
    reason: str


RevisionResult = Union[str, RevisionLookupFailure]


def revision_or_unknown(result: RevisionResult) -> str:
    if isinstance(result, RevisionLookupFailure):
        return UNKNOWN_REVISION
    return result


class RevisionProvider(ABC):
    """Base class for revision providers."""

    @abstractmethod
    def lookup(self) -> RevisionResult:
        pass


class GitRevisionProvider(RevisionProvider):
    """Short commit hash of HEAD via ``git rev-parse --short HEAD``."""

    def __init__(self, repo_dir: Optional[Path] = None, git_executable: str = "git"):
        self.repo_dir = repo_dir
        self.git_executable = git_executable

    def lookup(self) -> RevisionResult:
        try:
            proc = subprocess.run(
                [self.git_executable, "rev-parse", "--short", "HEAD"],
                cwd=str(self.repo_dir) if self.repo_dir else None,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            return RevisionLookupFailure(f"git unavailable: {e}")

        if proc.returncode != 0:
            return RevisionLookupFailure(
                f"git exited with status {proc.returncode}: {proc.stderr.strip()}"
            )

        revision = proc.stdout.strip()
        if not revision:
            return RevisionLookupFailure("git returned an empty revision")
        return revision


class StaticRevisionProvider(RevisionProvider):
    """Fixed revision, e.g. supplied by a CI environment."""

    def __init__(self, revision: str):
        self.revision = revision

    def lookup(self) -> RevisionResult:
        if not self.revision:
            return RevisionLookupFailure("no revision configured")
        return self.revision
