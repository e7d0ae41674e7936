"""
lib/copy/Symlink.py

Purpose:
Recreates a source symlink on the destination, pointing at exactly the same target string.

Place in Architecture:
Replicator for FileType.SYMLINK entries, dispatched by DiskDrive.

Interface:

	symlink_copy(srcPath, destScope, executor=drive)

TODOs/FIXMEs:
None.
"""

import logging

from ..Upath import *
from .common.CopyOp import *

# The target is never rewritten, so an absolute target only means something if the same path exists on the destination.
# Missing parent directories are created, as for files.
# An identical existing link is left alone so repeated copies succeed; anything else already at the destination is EEXIST.
class SymlinkCopy(Replicator):
	def __init__(this, name="SymlinkCopy"):
		super().__init__(name)

	async def Run(this, drive, srcPath, destScope):
		destPath = JoinDestination(destScope, srcPath)
		target = await drive.src.ReadLink(srcPath)

		await drive.dest.CreateDirAll(udirname(destPath))

		try:
			existing = await drive.dest.ReadLink(destPath)
		except OSError:
			existing = None

		if existing == target:
			logging.debug(f"Link {destPath} -> {target} already exists")
		else:
			logging.debug(f"Linking {destPath} to {target}")
			await drive.dest.Symlink(target, destPath)

		drive.report.symlinks.append(destPath)


symlink_copy = SymlinkCopy()
