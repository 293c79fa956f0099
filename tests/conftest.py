"""
Shared fixtures: a throwaway worker project on disk and a fake bundler.
"""

import json
from pathlib import Path

import pytest

from workerpack.bundling.base import Compiler, CompileRequest
from workerpack.core.config import WorkerpackSettings, load_build_config
from workerpack.core.errors import CompileError
from workerpack.metadata.revision import RevisionProvider, RevisionLookupFailure

ICON_BYTES = b"\x00\x00\x01\x00fake-icon"

PAGE_HTML = """<!DOCTYPE html>
<html>
<head><title>Panel __VERSION__</title>__STYLE__</head>
<body>
<footer>v__VERSION__</footer>
<script>__SCRIPT__</script>
</body>
</html>
"""

ERROR_HTML = "<html><body>Error page, version __VERSION__</body></html>\n"


class FakeCompiler(Compiler):
    """Records requests and returns a canned module, or fails on demand."""

    def __init__(self, output: str = "export default {};\n", diagnostics=None):
        self.output = output
        self.diagnostics = diagnostics
        self.requests = []

    async def compile(self, request: CompileRequest) -> str:
        self.requests.append(request)
        if self.diagnostics:
            raise CompileError("esbuild failed (exit=1)", self.diagnostics)
        return self.output


class FailingRevisionProvider(RevisionProvider):
    def lookup(self):
        return RevisionLookupFailure("git unavailable: test")


def write_page(asset_root: Path, name: str, html: str = PAGE_HTML,
               style: str = "body { color: red; }", script: str = "console.log('hi');"):
    page_dir = asset_root / name
    page_dir.mkdir(parents=True, exist_ok=True)
    (page_dir / "index.html").write_text(html, encoding="utf-8")
    if style is not None:
        (page_dir / "style.css").write_text(style, encoding="utf-8")
    if script is not None:
        (page_dir / "script.js").write_text(script, encoding="utf-8")
    return page_dir


@pytest.fixture
def worker_project(tmp_path):
    """A minimal worker project with panel, login, secrets and error pages."""
    root = tmp_path / "worker"
    assets = root / "src" / "assets"
    assets.mkdir(parents=True)

    (root / "package.json").write_text(json.dumps({"name": "worker", "version": "1.2.3"}))
    (root / "src" / "worker.js").write_text("export default { fetch() {} };\n")
    (assets / "favicon.ico").write_bytes(ICON_BYTES)

    for name in ("panel", "login", "secrets"):
        write_page(assets, name)
    write_page(assets, "error", html=ERROR_HTML, style=None, script=None)
    return root


@pytest.fixture
def build_config(worker_project):
    return load_build_config(worker_project, settings=WorkerpackSettings(_env_file=None))


@pytest.fixture
def fake_compiler():
    return FakeCompiler()
