"""
esbuild back-ends for the Compiler contract.

Two ways of driving esbuild are supported:

1. ``EsbuildNodeCompiler`` runs a small Node.js bridge that calls the esbuild
   JS API. Options travel as JSON on stdin, so large page literals are not
   subject to command-line length limits. Requires the ``esbuild`` npm
   package to be resolvable from the project root.
2. ``EsbuildCliCompiler`` runs the standalone ``esbuild`` executable with the
   equivalent flags and reads the bundle from stdout.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from workerpack.bundling.base import Compiler, CompileRequest
from workerpack.core.errors import CompileError

logger = logging.getLogger(__name__)

NODE_BRIDGE = r"""
const esbuild = require('esbuild');
let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { input += chunk; });
process.stdin.on('end', async () => {
  const options = JSON.parse(input);
  try {
    const result = await esbuild.build({ ...options, logLevel: 'silent' });
    for (const w of result.warnings) {
      process.stderr.write(JSON.stringify({ warning: w.text }) + '\n');
    }
    if (result.outputFiles.length !== 1) {
      process.stderr.write(JSON.stringify({ errors: ['expected exactly one output file, got ' + result.outputFiles.length] }) + '\n');
      process.exit(1);
    }
    process.stdout.write(result.outputFiles[0].text);
  } catch (err) {
    const errors = (err && err.errors ? err.errors : []).map((e) =>
      e.location ? `${e.location.file}:${e.location.line}:${e.location.column}: ${e.text}` : e.text);
    if (errors.length === 0) errors.push(String(err && err.message ? err.message : err));
    process.stderr.write(JSON.stringify({ errors }) + '\n');
    process.exit(1);
  }
});
"""


async def run_process(
    args: Sequence[str],
    cwd: Union[str, Path],
    stdin: Optional[bytes] = None,
) -> Tuple[int, bytes, bytes]:
    """
    Run a subprocess without blocking the event loop.

    Returns:
        (returncode, stdout, stderr)

    Raises:
        CompileError: If the executable cannot be started
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd),
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise CompileError(f"Could not start bundler '{args[0]}': {e}")

    stdout, stderr = await proc.communicate(stdin)
    return proc.returncode, stdout, stderr


def parse_bridge_diagnostics(stderr: str) -> Tuple[List[str], List[str]]:
    """
    Split the bridge's stderr into (errors, warnings).

    Lines that are not bridge JSON are treated as errors verbatim.
    """
    errors: List[str] = []
    warnings: List[str] = []
    for line in stderr.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError:
            errors.append(line)
            continue
        if not isinstance(payload, dict):
            errors.append(line)
        elif "warning" in payload:
            warnings.append(str(payload["warning"]))
        else:
            errors.extend(str(e) for e in payload.get("errors", []))
    return errors, warnings


class EsbuildNodeCompiler(Compiler):
    """Drive the esbuild JS API through ``node``."""

    def __init__(self, project_root: Union[str, Path], node_executable: str = "node"):
        self.project_root = Path(project_root)
        self.node_executable = node_executable

    @property
    def name(self) -> str:
        return "esbuild-node"

    async def compile(self, request: CompileRequest) -> str:
        payload = json.dumps(request.to_esbuild_options()).encode("utf-8")
        logger.debug("Invoking esbuild via %s for %s", self.node_executable, request.entry_point)

        returncode, stdout, stderr = await run_process(
            [self.node_executable, "-e", NODE_BRIDGE],
            cwd=self.project_root,
            stdin=payload,
        )
        errors, warnings = parse_bridge_diagnostics(stderr.decode("utf-8", errors="replace"))
        for warning in warnings:
            logger.warning("esbuild: %s", warning)

        if returncode != 0 or errors:
            raise CompileError(
                f"esbuild failed (exit={returncode})",
                errors or [f"bundler exited with status {returncode}"],
            )
        return stdout.decode("utf-8")


class EsbuildCliCompiler(Compiler):
    """Drive the standalone ``esbuild`` executable."""

    def __init__(self, project_root: Union[str, Path], esbuild_executable: str = "esbuild"):
        self.project_root = Path(project_root)
        self.esbuild_executable = esbuild_executable

    @property
    def name(self) -> str:
        return "esbuild-cli"

    def build_args(self, request: CompileRequest) -> List[str]:
        args = [self.esbuild_executable, str(request.entry_point)]
        if request.bundle:
            args.append("--bundle")
        args.append(f"--format={request.format}")
        args.append(f"--platform={request.platform}")
        args.append(f"--target={request.target}")
        if request.minify:
            args.append("--minify")
        for module in request.external:
            args.append(f"--external:{module}")
        for key, value in request.define.items():
            args.append(f"--define:{key}={value}")
        args.append("--log-level=error")
        return args

    async def compile(self, request: CompileRequest) -> str:
        returncode, stdout, stderr = await run_process(
            self.build_args(request),
            cwd=self.project_root,
        )
        if returncode != 0:
            diagnostics = [
                line.strip() for line in stderr.decode("utf-8", errors="replace").splitlines()
                if line.strip()
            ]
            raise CompileError(
                f"esbuild failed (exit={returncode})",
                diagnostics or [f"bundler exited with status {returncode}"],
            )
        return stdout.decode("utf-8")
