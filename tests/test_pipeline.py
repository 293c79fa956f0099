"""
End-to-end pipeline tests with a fake bundler.
"""

import asyncio
import base64
import json
import shutil
import zipfile

from workerpack.core.errors import AssetMissing, CompileError
from workerpack.metadata.revision import StaticRevisionProvider
from workerpack.pipelines.build_pipeline import BuildPipeline
from conftest import FailingRevisionProvider, FakeCompiler


def run(pipeline):
    return asyncio.run(pipeline.run())


def test_successful_build(build_config):
    compiler = FakeCompiler(output="export default { fetch() {} };\n")
    stages_seen = []
    pipeline = BuildPipeline(
        build_config,
        compiler,
        revision_provider=StaticRevisionProvider("abc1234"),
        on_stage_complete=lambda name, message: stages_seen.append(name),
    )

    report = run(pipeline)

    assert report.success
    assert report.completed_stages == ["assets", "bundle", "stamp", "package"]
    assert stages_seen == report.completed_stages
    assert report.artifact.revision == "abc1234"

    raw = build_config.raw_output_path.read_bytes()
    assert raw.startswith(b"// Build: ")
    assert raw.endswith(b"// @ts-nocheck\nexport default { fetch() {} };\n")
    with zipfile.ZipFile(build_config.archive_path) as zipf:
        assert zipf.namelist() == ["_worker.js"]
        assert zipf.read("_worker.js") == raw


def test_pages_substituted_in_defines(build_config):
    compiler = FakeCompiler()
    report = run(BuildPipeline(build_config, compiler, StaticRevisionProvider("abcd")))
    assert report.success

    define = compiler.requests[0].define
    panel = base64.b64decode(json.loads(define["__PANEL_HTML_CONTENT__"])).decode("utf-8")
    assert "__VERSION__" not in panel
    assert "__STYLE__" not in panel
    assert "__SCRIPT__" not in panel
    assert panel.count("1.2.3") == 2
    assert "<style>body { color: red; }</style>" in panel

    error = base64.b64decode(json.loads(define["__ERROR_HTML_CONTENT__"])).decode("utf-8")
    assert error == "<html><body>Error page, version 1.2.3</body></html>\n"


def test_missing_roles_embedded_as_empty(build_config):
    shutil.rmtree(build_config.asset_root / "secrets")
    shutil.rmtree(build_config.asset_root / "login")

    compiler = FakeCompiler()
    report = run(BuildPipeline(build_config, compiler, StaticRevisionProvider("abcd")))

    assert report.success
    define = compiler.requests[0].define
    assert define["__SECRETS_HTML_CONTENT__"] == '""'
    assert define["__LOGIN_HTML_CONTENT__"] == '""'
    assert len(define) == 6


def test_compile_error_aborts_before_output(build_config):
    compiler = FakeCompiler(diagnostics=["worker.js:1:1: Expected ';'"])
    report = run(BuildPipeline(build_config, compiler, StaticRevisionProvider("abcd")))

    assert not report.success
    assert report.failed_stage == "bundle"
    assert isinstance(report.error, CompileError)
    assert report.completed_stages == ["assets"]
    assert not build_config.raw_output_path.exists()
    assert not build_config.archive_path.exists()


def test_missing_asset_aborts_before_bundling(build_config):
    (build_config.asset_root / "panel" / "style.css").unlink()
    compiler = FakeCompiler()
    report = run(BuildPipeline(build_config, compiler, StaticRevisionProvider("abcd")))

    assert not report.success
    assert report.failed_stage == "assets"
    assert isinstance(report.error, AssetMissing)
    assert compiler.requests == []


def test_revision_failure_is_not_fatal(build_config):
    report = run(BuildPipeline(build_config, FakeCompiler(), FailingRevisionProvider()))
    assert report.success
    assert report.artifact.revision == "unknown"
    assert b"| Commit: unknown |" in build_config.raw_output_path.read_bytes()


def test_error_page_without_companions(build_config):
    assert not (build_config.asset_root / "error" / "style.css").exists()
    report = run(BuildPipeline(build_config, FakeCompiler(), StaticRevisionProvider("abcd")))
    assert report.success
