"""
Build metadata: revision lookup and banner stamping.
"""

from workerpack.metadata.revision import (
    RevisionLookupFailure,
    RevisionProvider,
    GitRevisionProvider,
    StaticRevisionProvider,
    UNKNOWN_REVISION,
)
from workerpack.metadata.stamper import MetadataStamper, build_banner, iso_timestamp
