"""Read-back access to a packaged worker archive.

Used to verify that an archive holds exactly the raw artifact it was built
from, without extracting it to disk.
"""

import os
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class WorkerArchive:
    """Class for inspecting a packaged worker zip."""

    def __init__(self, archive_path: Union[str, Path]):
        """Initialize with path to the archive.

        Args:
            archive_path: Path to the zip file

        Raises:
            FileNotFoundError: If the archive file doesn't exist
            zipfile.BadZipFile: If the file is not a valid ZIP file
        """
        self.archive_path = str(archive_path)

        if not os.path.exists(self.archive_path):
            raise FileNotFoundError(f"Archive file '{self.archive_path}' not found")

        try:
            with zipfile.ZipFile(self.archive_path, 'r'):
                pass
        except zipfile.BadZipFile:
            raise zipfile.BadZipFile(f"'{self.archive_path}' is not a valid ZIP file")

    def entry_names(self) -> List[str]:
        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            return zipf.namelist()

    def read_entry(self, name: str) -> bytes:
        """Return the decompressed bytes of one entry.

        Raises:
            KeyError: If the entry is not in the archive
        """
        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            return zipf.read(name)

    def get_stats(self) -> Dict[str, Any]:
        """Size and compression information for each entry."""
        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            entries = [
                {
                    'name': info.filename,
                    'size': info.file_size,
                    'compressed_size': info.compress_size,
                    'deflated': info.compress_type == zipfile.ZIP_DEFLATED,
                }
                for info in zipf.infolist()
            ]
        return {
            'archive_size': os.path.getsize(self.archive_path),
            'entries': entries,
        }

    def verify_against(self, raw_path: Union[str, Path], entry_name: str) -> Optional[str]:
        """Check the archive holds exactly one entry matching the raw file.

        Args:
            raw_path: Path to the raw artifact
            entry_name: Expected entry name

        Returns:
            None if the archive matches, otherwise a description of the mismatch
        """
        names = self.entry_names()
        if names != [entry_name]:
            return f"expected a single entry '{entry_name}', found {names}"

        raw_path = Path(raw_path)
        if not raw_path.exists():
            return f"raw artifact '{raw_path}' not found"

        if self.read_entry(entry_name) != raw_path.read_bytes():
            return f"entry '{entry_name}' differs from {raw_path}"
        return None
