"""
Core configuration and error types shared by every build stage.
"""

from workerpack.core.errors import (
    BuildError,
    AssetMissing,
    AssetUnreadable,
    CompileError,
    PackagingError,
    ConfigError,
)
from workerpack.core.config import BuildConfig, WorkerpackSettings, load_build_config
