"""
lib/copy/File.py

Purpose:
Copies a source file's content to the destination, resolving what to do when something already exists there, then copies mode and ownership.

Place in Architecture:
Replicator for FileType.FILE entries, dispatched by DiskDrive. Also the whole copy when the source scope is a single file.

Interface:

	file_copy(srcPath, destScope, executor=drive)
	GetDestinationState(fs, upath): Metadata of upath without following a symlink, or None if nothing is there.

Destination policy:

	missing    -> create exclusively and copy.
	directory  -> copy into <directory>/<source base name>. That path is checked against this same policy, without descending further.
	file       -> truncate and overwrite in place.
	symlink    -> warn and skip. The link and its target are untouched.
	other      -> log an error and skip.

TODOs/FIXMEs:
None.
"""

import errno
import logging

from ..Upath import *
from ..Utils import *
from ..fs.common.OpenOptions import *
from .common.CopyOp import *
from .Permissions import *

async def GetDestinationState(fs, upath):
	try:
		return await fs.SymlinkMetadata(upath)
	except OSError as err:
		if err.errno == errno.ENOENT:
			return None
		raise


class FileCopy(Replicator):
	def __init__(this, name="FileCopy"):
		super().__init__(name)

	async def Run(this, drive, srcPath, destScope):
		destPath = JoinDestination(destScope, srcPath)

		logging.debug(f"Creating file {destPath}")
		await drive.dest.CreateDirAll(udirname(destPath))

		async with await drive.src.Open(srcPath, OpenOptions(read=True)) as srcHandle:
			target, options = await this.ChooseTarget(drive, srcPath, destPath)
			if (target is None):
				return

			async with await drive.dest.Open(target, options) as destHandle:
				await CopyStream(srcHandle, destHandle, drive.block_size)

			metadata = await srcHandle.Metadata()

		await permissions_copy(drive.dest, target, metadata)
		drive.report.files.append(target)

	# RETURNS the upath to write and the OpenOptions to write it with, or (None, None) if the file is skipped.
	async def ChooseTarget(this, drive, srcPath, destPath):
		destMetadata = await GetDestinationState(drive.dest, destPath)

		if (destMetadata is not None and destMetadata.IsDir()):
			target = ujoin(destPath, ubasename(srcPath))
			logging.debug(f"Copying into dir {destPath} as {target}")
			destPath = target
			destMetadata = await GetDestinationState(drive.dest, destPath)

		if (destMetadata is None):
			logging.debug(f"Dest file {destPath} doesn't exist, copying directly")
			return destPath, OpenOptions(write=True, create_new=True)

		if (destMetadata.IsSymlink()):
			logging.warning(f"Dest file path {destPath} is a symlink, skipping copy!")
			drive.report.Skip(srcPath, f"destination {destPath} is a symlink")
			return None, None

		if (destMetadata.IsFile()):
			logging.debug(f"Overwriting dest file {destPath}")
			return destPath, OpenOptions(write=True, truncate=True)

		logging.error(f"Dest file path {destPath} is a {destMetadata.fileType}, skipping copy!")
		drive.report.Skip(srcPath, f"destination {destPath} is a {destMetadata.fileType}")
		return None, None


file_copy = FileCopy()
