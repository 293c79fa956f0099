"""
Packaging of the stamped worker into its raw and zip outputs.
"""

from workerpack.packaging.packager import Packager, create_archive
from workerpack.packaging.archive_reader import WorkerArchive
