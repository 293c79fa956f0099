# src/workerpack/bundling/manager.py

from typing import Dict, List, Type

from workerpack.bundling.base import Compiler
from workerpack.bundling.esbuild import EsbuildCliCompiler, EsbuildNodeCompiler
from workerpack.core.config import BuildConfig


class CompilerManager:
    """
    Factory for bundler back-ends, keyed by back-end name.
    """
    def __init__(self, config: BuildConfig):
        """Initialize with the build configuration."""
        self.config = config
        self.compiler_classes: Dict[str, Type[Compiler]] = {
            "esbuild-node": EsbuildNodeCompiler,
            "esbuild-cli": EsbuildCliCompiler,
        }
        # Executable setting passed to each back-end's constructor
        self.executables: Dict[str, str] = {
            "esbuild-node": config.node_executable,
            "esbuild-cli": config.esbuild_executable,
        }

    def available_backends(self) -> List[str]:
        return sorted(self.compiler_classes)

    def get_compiler(self, backend: str = None) -> Compiler:
        """
        Get a compiler for the given back-end.

        Args:
            backend: Back-end name (e.g. "esbuild-node", "esbuild-cli").
                     If None, uses the back-end from the build configuration.

        Raises:
            ValueError: If the back-end is unknown
        """
        backend = backend or self.config.compiler_backend
        compiler_class = self.compiler_classes.get(backend)
        if compiler_class is None:
            raise ValueError(
                f"Unknown compiler backend: {backend}. "
                f"Available: {', '.join(self.available_backends())}"
            )
        return compiler_class(self.config.project_root, self.executables[backend])


def get_compiler(config: BuildConfig, backend: str = None) -> Compiler:
    """
    Get a compiler instance for the configured (or given) back-end.

    Examples:
        >>> compiler = get_compiler(config, "esbuild-cli")
    """
    return CompilerManager(config).get_compiler(backend)
