"""
Pydantic schemas for build records.

Records flow in one direction only:
TemplatePage -> SubstitutionResult -> (ConstantTable) -> BuildArtifact -> PackagedOutput
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

# Symbolic name -> literal source text handed to the bundler as a define
ConstantTable = Dict[str, str]


class TemplatePage(BaseModel):
    """Raw text assets of one page directory."""
    name: str
    raw_html: str
    style_text: Optional[str] = None
    script_text: Optional[str] = None

    @property
    def is_error_page(self) -> bool:
        return self.name == "error"


class SubstitutionResult(BaseModel):
    """Substituted page HTML, as a quoted base64 string literal."""
    model_config = ConfigDict(frozen=True)

    name: str
    encoded_html: str


class BuildArtifact(BaseModel):
    """Stamped worker source plus the metadata recorded in its banner."""
    model_config = ConfigDict(frozen=True)

    source_code: str
    timestamp: str
    revision: str
    version: str


class PackagedOutput(BaseModel):
    """The two files written by the packager."""
    model_config = ConfigDict(frozen=True)

    raw_path: Path
    archive_path: Path
    raw_bytes: bytes
    archive_bytes: bytes
