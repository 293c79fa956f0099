# src/workerpack/bundling/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict


class CompileRequest(BaseModel):
    """
    Everything a bundler back-end needs to produce one ES module.
    """
    model_config = ConfigDict(frozen=True)

    entry_point: Path
    define: Dict[str, str]
    external: Tuple[str, ...] = ()
    bundle: bool = True
    format: str = "esm"
    minify: bool = False
    platform: str = "browser"
    target: str = "es2020"

    def to_esbuild_options(self) -> Dict[str, Any]:
        """
        Options in the shape accepted by the esbuild JS ``build()`` API.
        """
        return {
            "entryPoints": [str(self.entry_point)],
            "bundle": self.bundle,
            "format": self.format,
            "write": False,
            "external": list(self.external),
            "platform": self.platform,
            "target": self.target,
            "minify": self.minify,
            "define": dict(self.define),
        }


class Compiler(ABC):
    """
    Base class for bundler back-ends.

    A back-end compiles the module graph reachable from the entry point, with
    the given compile-time constants, into a single source text.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    async def compile(self, request: CompileRequest) -> str:
        """
        Compile the request and return the emitted source text.

        Raises:
            CompileError: If the bundler reports any error diagnostic.
        """
        pass
