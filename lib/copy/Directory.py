"""
lib/copy/Directory.py

Purpose:
Materializes a source directory on the destination and copies its mode and ownership.

Place in Architecture:
Replicator for FileType.DIRECTORY entries, dispatched by DiskDrive. Runs before anything inside the directory is copied.

Interface:

	directory_copy(srcPath, destScope, executor=drive)

TODOs/FIXMEs:
None.
"""

import logging

from ..Upath import *
from .common.CopyOp import *

class DirectoryCopy(Replicator):
	def __init__(this, name="DirectoryCopy"):
		super().__init__(name)

	async def Run(this, drive, srcPath, destScope):
		destPath = JoinDestination(destScope, srcPath)

		logging.debug(f"Creating dir {destPath}")
		await drive.dest.CreateDirAll(destPath)

		metadata = await drive.src.Metadata(srcPath)
		await drive.dest.SetPermissions(destPath, metadata.mode)
		await drive.dest.Chown(destPath, metadata.uid, metadata.gid)

		drive.report.directories.append(destPath)


directory_copy = DirectoryCopy()
