"""
lib/DiskDrive.py

Purpose:
The copy engine. Copies a file or a directory subtree from one Filesystem to another, preserving structure, symlinks, permission bits and ownership.

Place in Architecture:
The eons.Executor governing a copy. It validates its args, discovers the source paths (lib/copy/Discover.py), classifies each one and hands it to the matching replicator in lib/copy/. All state for a single copy lives on *this; the CopyOps are stateless and are given *this as their executor.

Interface:

	DiskDrive()(src, dest, src_scope="/", dest_scope="/", block_size=BLOCK_SIZE): RETURNS a coroutine; await it for the CopyReport.
		src, dest: Filesystems. Anything else raises TypeError.
		block_size: bytes per read / write, as an int or a size string such as "64KiB". An invalid size raises eons.MissingArgumentError.
		Like any eons.Executor, optional args not given in the call are Fetched, e.g. from the BLOCK_SIZE environment variable.
	Copy(): Run the copy with the args *this was called with.
	Dispatch(srcPath): Classify and replicate one path.
	copy_between(src, dest)
	copy_from_src(src, dest, src_scope)
	copy_to_dest(src, dest, dest_scope)
	copy_from_src_to_dest(src, dest, src_scope, dest_scope)

	Everything fatal raises CopyError. Entries of unsupported types, and files whose destination is a symlink, are logged, recorded in the report as skipped and do not stop the copy.

TODOs/FIXMEs:
None. Note there is no rollback: after a CopyError the destination keeps whatever was copied before the failure.
"""

import logging
import eons

from .Upath import *
from .Utils import *
from .fs.Filesystem import *
from .fs.common.Metadata import *
from .copy.common.CopyOp import *
from .copy.common.Report import *
from .copy.Discover import *
from .copy.Classify import *
from .copy.Symlink import *
from .copy.Directory import *
from .copy.File import *

# Which replicator handles which kind of source entry.
REPLICATORS = {
	FileType.SYMLINK: symlink_copy,
	FileType.DIRECTORY: directory_copy,
	FileType.FILE: file_copy,
}

# Paths are processed strictly one after the other, in the order scope_discover returns them.
# Each path is fully replicated before the next one starts, so a directory always exists before its contents are written.
class DiskDrive(eons.Executor):
	def __init__(this, name="DiskDrive"):
		super().__init__(name, description="Copy a file or directory tree between Filesystems.")

		this.arg.kw.required.append("src")
		this.arg.kw.required.append("dest")
		this.arg.mapping.append("src")
		this.arg.mapping.append("dest")

		this.arg.kw.optional["src_scope"] = ROOT
		this.arg.kw.optional["dest_scope"] = ROOT
		this.arg.kw.optional["block_size"] = str(BLOCK_SIZE) # Bytes moved per read / write.

		this.arg.type["src_scope"] = Scope
		this.arg.type["dest_scope"] = Scope
		this.arg.type["block_size"] = str

		# A copy is a single call; nothing is sequenced after it.
		this.feature.track = False
		this.feature.sequential = False

		# Failures reach the caller as CopyErrors. Nothing is resolved or installed on the fly.
		this.error.resolve = False

		this.report = None

	# Logging belongs to whoever runs the copy (e.g. diskdrive.DISKDRIVE).
	def SetupLogging(this):
		pass

	def TeardownLogging(this):
		pass

	# No network session is needed.
	def Configure(this):
		this.functionSucceeded = True
		this.rollbackSucceeded = True

	# DiskDrive ships no eons modules to register.
	def RegisterIncludedClasses(this):
		pass

	# A DiskDrive is configured by the args it is called with, not the process' command line or a config file.
	def ParseInitialArgs(this):
		this.extraArgs = this.kwargs

	def ValidateArgs(this):
		super().ValidateArgs()

		if (not isinstance(this.src, Filesystem)):
			raise TypeError(f"source must be a Filesystem, not {type(this.src).__name__}")
		if (not isinstance(this.dest, Filesystem)):
			raise TypeError(f"destination must be a Filesystem, not {type(this.dest).__name__}")

		try:
			this.block_size = parse_size(this.block_size)
			if (not this.block_size > 0):
				raise ValueError()
		except ValueError:
			raise eons.MissingArgumentError(f"error: block_size {this.block_size} is not a valid size specifier")

	# RETURNS the coroutine for the caller to await.
	def Function(this):
		return this.Copy()

	async def Copy(this):
		this.report = CopyReport(this.src_scope, this.dest_scope)

		logging.info(f"Copying {this.src}:{this.src_scope} to {this.dest}:{this.dest_scope}")
		for srcPath in await scope_discover(this.src_scope, executor=this):
			await this.Dispatch(srcPath)

		logging.info(f"Copied {this.src}:{this.src_scope} to {this.dest}:{this.dest_scope}: {this.report}")
		return this.report

	async def Dispatch(this, srcPath):
		logging.debug(f"Processing src path {srcPath}")

		fileType = await entry_classify(srcPath, executor=this)
		replicator = REPLICATORS.get(fileType)
		if replicator is None:
			logging.error(f"Unknown file type {fileType} for source path {srcPath}")
			this.report.Skip(srcPath, f"unsupported file type {fileType}")
			return

		logging.debug(f"Copy {fileType} {srcPath} -> {JoinDestination(this.dest_scope, srcPath)}")
		await replicator(srcPath, this.dest_scope, executor=this)


async def copy_between(src, dest, **kw):
	return await DiskDrive()(src, dest, **kw)


async def copy_from_src(src, dest, src_scope, **kw):
	return await DiskDrive()(src, dest, src_scope=src_scope, **kw)


async def copy_to_dest(src, dest, dest_scope, **kw):
	return await DiskDrive()(src, dest, dest_scope=dest_scope, **kw)


async def copy_from_src_to_dest(src, dest, src_scope, dest_scope, **kw):
	return await DiskDrive()(src, dest, src_scope=src_scope, dest_scope=dest_scope, **kw)
