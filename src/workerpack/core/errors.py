# src/workerpack/core/errors.py
"""
Error taxonomy for the build pipeline.

Every fatal failure is a BuildError subclass. Revision lookup failures are
not exceptions; see workerpack.metadata.revision.
"""

from typing import List, Optional


class BuildError(Exception):
    """Base class for fatal build failures."""


class ConfigError(BuildError):
    """Project metadata could not be read or is incomplete."""


class AssetMissing(BuildError):
    """A required template asset (or the asset root itself) is absent."""

    def __init__(self, path, page: Optional[str] = None):
        self.path = path
        self.page = page
        if page:
            message = f"Page '{page}' is missing required asset: {path}"
        else:
            message = f"Required asset not found: {path}"
        super().__init__(message)


class AssetUnreadable(BuildError):
    """A template asset exists but could not be read."""

    def __init__(self, path, reason: str, page: Optional[str] = None):
        self.path = path
        self.page = page
        where = f"Page '{page}' asset" if page else "Asset"
        super().__init__(f"{where} {path} could not be read: {reason}")


class CompileError(BuildError):
    """The bundler reported diagnostics or could not be started."""

    def __init__(self, message: str, diagnostics: Optional[List[str]] = None):
        self.diagnostics = list(diagnostics or [])
        if self.diagnostics:
            message = f"{message}\n" + "\n".join(f"  - {d}" for d in self.diagnostics)
        super().__init__(message)


class PackagingError(BuildError):
    """Writing the raw artifact or generating the archive failed."""
