"""
Pydantic schemas for the records passed between build stages.
"""

from workerpack.schemas.build import (
    TemplatePage,
    SubstitutionResult,
    BuildArtifact,
    PackagedOutput,
    ConstantTable,
)
