"""
Build pipelines.
"""

from workerpack.pipelines.build_pipeline import BuildPipeline, BuildReport, Stage
