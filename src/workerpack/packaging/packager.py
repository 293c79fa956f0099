"""Artifact packaging.

Writes the stamped worker source to the raw output path, then builds a
single-entry DEFLATE zip of the same bytes and writes it next to it.
"""

import asyncio
import io
import logging
import zipfile
from pathlib import Path

from workerpack.core.config import BuildConfig
from workerpack.core.errors import PackagingError
from workerpack.schemas.build import BuildArtifact, PackagedOutput

logger = logging.getLogger(__name__)


def create_archive(entry_name: str, content: bytes) -> bytes:
    """Build an in-memory zip holding exactly one deflated entry.

    Args:
        entry_name: Name of the entry inside the archive
        content: Entry bytes

    Returns:
        Zip archive bytes
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zipf:
        zipf.writestr(entry_name, content)
    return buf.getvalue()


class Packager:
    """Writes the raw artifact and its zip archive to the dist directory."""

    def __init__(self, config: BuildConfig):
        self.config = config

    def ensure_output_dir(self) -> Path:
        try:
            self.config.dist_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PackagingError(f"Could not create output directory {self.config.dist_dir}: {e}")
        return self.config.dist_dir

    def write_raw(self, content: bytes) -> Path:
        path = self.config.raw_output_path
        try:
            path.write_bytes(content)
        except OSError as e:
            raise PackagingError(f"Could not write {path}: {e}")
        logger.info("Wrote %s (%d bytes)", path, len(content))
        return path

    async def write_archive(self, content: bytes) -> bytes:
        """Generate the archive off the event loop, then write it."""
        path = self.config.archive_path
        try:
            archive_bytes = await asyncio.to_thread(
                create_archive, self.config.archive_entry_name, content
            )
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise PackagingError(f"Could not generate archive: {e}")

        try:
            path.write_bytes(archive_bytes)
        except OSError as e:
            raise PackagingError(f"Could not write {path}: {e}")
        logger.info("Wrote %s (%d bytes)", path, len(archive_bytes))
        return archive_bytes

    async def package(self, artifact: BuildArtifact) -> PackagedOutput:
        """Write both outputs. The raw file is on disk before the archive is built.

        Raises:
            PackagingError: If any write or the archive generation fails
        """
        content = artifact.source_code.encode("utf-8")

        self.ensure_output_dir()
        raw_path = self.write_raw(content)
        archive_bytes = await self.write_archive(content)

        return PackagedOutput(
            raw_path=raw_path,
            archive_path=self.config.archive_path,
            raw_bytes=content,
            archive_bytes=archive_bytes,
        )
