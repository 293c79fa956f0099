"""Constant table construction and bundler invocation.

Each known page role maps to a fixed define name. The table always holds the
full key set: a role with no discovered page gets the empty-string literal so
the worker source never references an undefined constant.
"""

import base64
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from workerpack.bundling.base import Compiler, CompileRequest
from workerpack.core.config import BuildConfig
from workerpack.core.errors import AssetMissing, AssetUnreadable
from workerpack.schemas.build import ConstantTable, SubstitutionResult

logger = logging.getLogger(__name__)

EMPTY_LITERAL = '""'
ICON_CONSTANT = "__ICON__"
VERSION_CONSTANT = "__VERSION__"

# Page directory name -> define name
PAGE_CONSTANTS: Dict[str, str] = {
    "panel": "__PANEL_HTML_CONTENT__",
    "login": "__LOGIN_HTML_CONTENT__",
    "error": "__ERROR_HTML_CONTENT__",
    "secrets": "__SECRETS_HTML_CONTENT__",
}

CONSTANT_KEYS = tuple(PAGE_CONSTANTS.values()) + (ICON_CONSTANT, VERSION_CONSTANT)


def build_constant_table(
    results: Iterable[SubstitutionResult],
    icon_bytes: bytes,
    version: str,
) -> ConstantTable:
    """Build the define table handed to the bundler.

    Args:
        results: Processed pages; names outside the known roles are ignored
        icon_bytes: Raw favicon bytes
        version: Project version string

    Returns:
        Mapping with exactly the keys in CONSTANT_KEYS
    """
    by_name = {result.name: result.encoded_html for result in results}

    table: ConstantTable = {}
    for page_name, constant in PAGE_CONSTANTS.items():
        table[constant] = by_name.get(page_name, EMPTY_LITERAL)

    table[ICON_CONSTANT] = json.dumps(base64.b64encode(icon_bytes).decode("ascii"))
    table[VERSION_CONSTANT] = json.dumps(version)

    ignored = sorted(set(by_name) - set(PAGE_CONSTANTS))
    if ignored:
        logger.info("Pages without a constant binding (not embedded): %s", ", ".join(ignored))
    return table


def read_icon(icon_path: Path) -> bytes:
    try:
        return Path(icon_path).read_bytes()
    except FileNotFoundError:
        raise AssetMissing(icon_path)
    except OSError as e:
        raise AssetUnreadable(icon_path, str(e))


class BundleBuilder:
    """Turns processed pages into one bundled ES module via a Compiler."""

    def __init__(self, config: BuildConfig, compiler: Compiler):
        self.config = config
        self.compiler = compiler

    def make_request(self, table: ConstantTable) -> CompileRequest:
        return CompileRequest(
            entry_point=self.config.entry_module,
            define=table,
            external=self.config.external_modules,
            bundle=True,
            format="esm",
            minify=False,
            platform=self.config.platform,
            target=self.config.target,
        )

    async def build(
        self,
        results: Iterable[SubstitutionResult],
        icon_bytes: Optional[bytes] = None,
    ) -> str:
        """Compile the entry module with the page constants.

        Raises:
            AssetMissing: If the icon asset is absent
            CompileError: If the compiler reports diagnostics
        """
        if icon_bytes is None:
            icon_bytes = read_icon(self.config.icon_path)

        table = build_constant_table(results, icon_bytes, self.config.version)
        request = self.make_request(table)

        logger.info("Bundling %s with %s", self.config.entry_module, self.compiler.name)
        return await self.compiler.compile(request)
