"""Template page discovery and loading.

A page is any directory below the asset root that holds an ``index.html``.
Every page except ``error`` must also provide ``style.css`` and ``script.js``.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Union

from workerpack.core.errors import AssetMissing, AssetUnreadable
from workerpack.schemas.build import TemplatePage

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
STYLE_FILE = "style.css"
SCRIPT_FILE = "script.js"
ERROR_PAGE = "error"


class TemplateStore:
    """Read-only access to the template pages under an asset root."""

    def __init__(self, asset_root: Union[str, Path]):
        """Initialize with the asset root directory.

        Args:
            asset_root: Directory holding one sub-directory per page
        """
        self.asset_root = Path(asset_root)

    def list_pages(self) -> List[str]:
        """Return the identifiers of all pages, sorted.

        Raises:
            AssetMissing: If the asset root does not exist
        """
        if not self.asset_root.is_dir():
            raise AssetMissing(self.asset_root)

        pages = []
        for index_path in self.asset_root.rglob(INDEX_FILE):
            if not index_path.is_file():
                continue
            page_dir = index_path.parent
            if page_dir == self.asset_root:
                continue
            pages.append(page_dir.relative_to(self.asset_root).as_posix())
        return sorted(pages)

    def page_dir(self, name: str) -> Path:
        return self.asset_root / name

    def load(self, name: str) -> TemplatePage:
        """Load the raw text assets of one page.

        Args:
            name: Page identifier as returned by list_pages()

        Returns:
            TemplatePage with style/script text set for every page but ``error``

        Raises:
            AssetMissing: If index.html, or a required companion file, is absent
        """
        base = self.page_dir(name)
        raw_html = self._read(base / INDEX_FILE, name)

        if name == ERROR_PAGE:
            return TemplatePage(name=name, raw_html=raw_html)

        return TemplatePage(
            name=name,
            raw_html=raw_html,
            style_text=self._read(base / STYLE_FILE, name),
            script_text=self._read(base / SCRIPT_FILE, name),
        )

    def load_all(self) -> Iterator[TemplatePage]:
        """Yield every page in enumeration order."""
        for name in self.list_pages():
            yield self.load(name)

    def companion_files(self, name: str) -> List[str]:
        """List which of the known asset files exist for a page."""
        base = self.page_dir(name)
        return [f for f in (INDEX_FILE, STYLE_FILE, SCRIPT_FILE) if (base / f).is_file()]

    @staticmethod
    def _read(path: Path, page: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except FileNotFoundError:
            raise AssetMissing(path, page=page)
        except OSError as e:
            raise AssetUnreadable(path, str(e), page=page)
