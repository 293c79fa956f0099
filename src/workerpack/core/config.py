# src/workerpack/core/config.py

import json
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from workerpack.core.errors import ConfigError


class WorkerpackSettings(BaseSettings):
    project_root: Path = Field(default=Path("."))
    asset_dir: str = Field(default="src/assets")
    entry_module: str = Field(default="src/worker.js")
    icon_file: str = Field(default="src/assets/favicon.ico")
    package_file: str = Field(default="package.json")
    dist_dir: str = Field(default="dist")
    raw_output_name: str = Field(default="worker.js")
    archive_name: str = Field(default="worker.zip")
    archive_entry_name: str = Field(default="_worker.js")

    # Bundler settings
    compiler_backend: str = Field(default="esbuild-node")
    node_executable: str = Field(default="node")
    esbuild_executable: str = Field(default="esbuild")
    target: str = Field(default="es2020")
    platform: str = Field(default="browser")
    external_modules: Tuple[str, ...] = Field(default=("cloudflare:sockets",))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WORKERPACK_",
        extra="ignore",
    )


class BuildConfig(BaseModel):
    """
    Immutable configuration for a single build, passed into every stage.
    """
    model_config = ConfigDict(frozen=True)

    project_root: Path
    asset_root: Path
    entry_module: Path
    icon_path: Path
    dist_dir: Path
    raw_output_name: str = "worker.js"
    archive_name: str = "worker.zip"
    archive_entry_name: str = "_worker.js"
    version: str
    external_modules: Tuple[str, ...] = ("cloudflare:sockets",)
    target: str = "es2020"
    platform: str = "browser"
    compiler_backend: str = "esbuild-node"
    node_executable: str = "node"
    esbuild_executable: str = "esbuild"

    @property
    def raw_output_path(self) -> Path:
        return self.dist_dir / self.raw_output_name

    @property
    def archive_path(self) -> Path:
        return self.dist_dir / self.archive_name


def read_project_version(package_file: Path) -> str:
    """
    Read the ``version`` field from a package.json file.

    Raises:
        ConfigError: If the file is unreadable, not JSON, or has no version.
    """
    try:
        with open(package_file, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Project metadata not found: {package_file}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read project metadata {package_file}: {e}")

    version = metadata.get("version") if isinstance(metadata, dict) else None
    if not version or not isinstance(version, str):
        raise ConfigError(f"No version string in {package_file}")
    return version


def load_build_config(
    project_root: Optional[Path] = None,
    compiler_backend: Optional[str] = None,
    settings: Optional[WorkerpackSettings] = None,
) -> BuildConfig:
    """
    Resolve settings into a BuildConfig. The project version is read once here.
    """
    settings = settings or WorkerpackSettings()
    root = Path(project_root if project_root is not None else settings.project_root).resolve()

    return BuildConfig(
        project_root=root,
        asset_root=root / settings.asset_dir,
        entry_module=root / settings.entry_module,
        icon_path=root / settings.icon_file,
        dist_dir=root / settings.dist_dir,
        raw_output_name=settings.raw_output_name,
        archive_name=settings.archive_name,
        archive_entry_name=settings.archive_entry_name,
        version=read_project_version(root / settings.package_file),
        external_modules=tuple(settings.external_modules),
        target=settings.target,
        platform=settings.platform,
        compiler_backend=compiler_backend or settings.compiler_backend,
        node_executable=settings.node_executable,
        esbuild_executable=settings.esbuild_executable,
    )
