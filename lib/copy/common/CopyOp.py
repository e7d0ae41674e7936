"""
lib/copy/common/CopyOp.py

Purpose:
Defines the error type of the copy engine and CopyOp, the Functor every step of a copy is built on.

Place in Architecture:
Serves as the foundation for the replicators in lib/copy/ and for the discovery and classification steps DiskDrive runs. It is the single place where backend failures become CopyErrors.

Interface:

	CopyError(errno, message, upath): OSError raised for any fatal failure. The backend exception is chained as __cause__.
	CopyOp: eons.Functor. Called as `await op(upath, ..., executor=drive)`. Children implement `async Run(drive, upath, ...)`.
	Replicator: CopyOp that also takes the destination scope.

TODOs/FIXMEs:
None.
"""

import errno
import logging
import eons

from ...Upath import *

# Raised for any failure that aborts a copy.
# .errno names the cause. .filename names the offending path: the one the backend reported, else the upath the CopyOp was given.
class CopyError(OSError):
	pass


# A CopyOp, or Copy Operation, is a Functor which replicates or inspects a single path.
# For example, copying a file, materializing a directory or classifying an entry.
# All CopyOps should:
# - Take the source upath first.
# - Be given the governing DiskDrive as `executor` on every call.
# - Leave all state (handles, report) on the DiskDrive.
# - Let errors propagate. Guard() turns them into CopyErrors.
# Calling a CopyOp returns a coroutine, so the body runs on the caller's event loop.
class CopyOp(eons.Functor):
	def __init__(this, name=eons.INVALID_NAME()):
		super().__init__(name)

		this.arg.kw.required.append('upath')
		this.arg.mapping.append('upath')
		this.arg.type['upath'] = Scope

		this.feature.autoReturn = False

		# CopyOps run one at a time, in the order their DiskDrive decides. They never form sequences.
		this.feature.track = False
		this.feature.sequential = False

	# The DiskDrive must be given explicitly.
	# A shared CopyOp instance must never keep the drive of a previous call.
	def PopulatePrecursor(this):
		this.executor = this.kwargs.pop('executor', None)
		if (this.executor is None):
			raise eons.MissingArgumentError(f"{this.name} requires the DiskDrive it runs for as 'executor'")
		this.Set('precursor', None)

	def Function(this):
		return this.Guard(this.executor, *[getattr(this, arg) for arg in this.arg.mapping])

	async def Guard(this, drive, upath, *args):
		try:
			return await this.Run(drive, upath, *args)
		except CopyError:
			raise
		except OSError as e:
			logging.debug(f"Failed {this.name} on {upath}", exc_info=True)
			code = e.errno if isinstance(e.errno, int) else errno.EIO
			raise CopyError(code, f"{this.name} failed: {e}", this.OffendingPath(e, upath)) from e
		except Exception as e:
			logging.warning(f"Unexpected exception in {this.name} on {upath}", exc_info=True)
			raise CopyError(errno.EIO, f"{this.name} failed: {e}", upath) from e

	# Backends name the upath they failed on, which may be below upath (e.g. a nested directory while walking).
	# Anything that is not a upath (a bare entry name, no filename at all) is reported as upath.
	def OffendingPath(this, error, upath):
		if (isinstance(error.filename, str) and error.filename.startswith(ROOT)):
			return error.filename
		return upath

	# Override this in your child class.
	async def Run(this, drive, upath, *args):
		raise NotImplementedError


# A Replicator is a CopyOp that writes upath, and everything it needs, below the destination scope.
class Replicator(CopyOp):
	def __init__(this, name=eons.INVALID_NAME()):
		super().__init__(name)

		this.arg.kw.required.append('dest_scope')
		this.arg.mapping.append('dest_scope')
		this.arg.type['dest_scope'] = Scope
