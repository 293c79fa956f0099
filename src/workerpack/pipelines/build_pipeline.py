# src/workerpack/pipelines/build_pipeline.py
"""
Sequential build pipeline.

Stages run strictly in order, each consuming only its predecessor's output:

    assets -> bundle -> stamp -> package

A stage either returns its value or raises a BuildError. The first BuildError
ends the run; the failure is reported once in the returned BuildReport.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Union

from workerpack.assets.processor import AssetProcessor
from workerpack.assets.template_store import TemplateStore
from workerpack.bundling.base import Compiler
from workerpack.bundling.builder import BundleBuilder
from workerpack.core.config import BuildConfig
from workerpack.core.errors import BuildError
from workerpack.metadata.revision import GitRevisionProvider, RevisionProvider
from workerpack.metadata.stamper import MetadataStamper
from workerpack.packaging.packager import Packager
from workerpack.schemas.build import BuildArtifact, PackagedOutput

logger = logging.getLogger(__name__)

StageFunc = Callable[[Any], Union[Any, Awaitable[Any]]]
StageCallback = Callable[[str, str], None]


@dataclass
class Stage:
    """One named step of the pipeline."""
    name: str
    func: StageFunc
    message: str


@dataclass
class BuildReport:
    """Outcome of a pipeline run."""
    success: bool
    completed_stages: List[str] = field(default_factory=list)
    failed_stage: Optional[str] = None
    error: Optional[BuildError] = None
    artifact: Optional[BuildArtifact] = None
    output: Optional[PackagedOutput] = None


class BuildPipeline:
    """
    Wires TemplateStore, AssetProcessor, BundleBuilder, MetadataStamper and
    Packager into one sequential run.
    """

    def __init__(
        self,
        config: BuildConfig,
        compiler: Compiler,
        revision_provider: Optional[RevisionProvider] = None,
        on_stage_complete: Optional[StageCallback] = None,
    ):
        self.config = config
        self.store = TemplateStore(config.asset_root)
        self.processor = AssetProcessor(config.version)
        self.builder = BundleBuilder(config, compiler)
        self.stamper = MetadataStamper(
            config.version,
            revision_provider or GitRevisionProvider(config.project_root),
        )
        self.packager = Packager(config)
        self.on_stage_complete = on_stage_complete

    def stages(self) -> List[Stage]:
        return [
            Stage("assets", self._process_assets, "Assets bundled successfully!"),
            Stage("bundle", self.builder.build, "Worker built successfully!"),
            Stage("stamp", self.stamper.stamp, "Build metadata stamped"),
            Stage("package", self.packager.package, "Artifacts written"),
        ]

    def _process_assets(self, _: Any):
        return self.processor.process_all(self.store.load_all())

    async def run(self) -> BuildReport:
        report = BuildReport(success=False)
        value: Any = None

        for stage in self.stages():
            logger.debug("Starting stage '%s'", stage.name)
            try:
                value = stage.func(value)
                if inspect.isawaitable(value):
                    value = await value
            except BuildError as e:
                logger.error("Stage '%s' failed: %s", stage.name, e)
                report.failed_stage = stage.name
                report.error = e
                return report

            report.completed_stages.append(stage.name)
            if isinstance(value, BuildArtifact):
                report.artifact = value
            elif isinstance(value, PackagedOutput):
                report.output = value

            logger.info(stage.message)
            if self.on_stage_complete:
                self.on_stage_complete(stage.name, stage.message)

        report.success = True
        return report
