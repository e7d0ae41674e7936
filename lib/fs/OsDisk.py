"""
lib/fs/OsDisk.py

Purpose:
The host operating system's filesystem, seen through a root directory. The upath "/x" maps to "<root>/x".

Place in Architecture:
A Filesystem backend. Every operation is a plain os call run in a worker thread; files are opened as FileOnDisk handles.

Interface:

	OsDisk(root="/", name=None): Validates that root is an existing directory.
	HostPath(upath): The real path for a upath.
	Implements every Filesystem method.

TODOs/FIXMEs:
Symlink targets are interpreted by the host kernel, so absolute targets resolve against the host root, not against *root*.
"""

import os
import errno
import asyncio

from ..Upath import *
from ..FileOnDisk import *
from .Filesystem import *

class OsDisk(Filesystem):
	def __init__(this, root="/", name=None):
		super().__init__(name or f"OsDisk({root})")

		this.root = os.path.abspath(os.fspath(root))
		this.ValidateArgs()

	def ValidateArgs(this):
		if not os.path.isdir(this.root):
			raise IOError(errno.ENOTDIR, "filesystem root is not a directory", this.root)

	def HostPath(this, upath):
		relative = ResolveScope(upath).lstrip(ROOT)
		if not relative:
			return this.root
		return os.path.join(this.root, *usplit(relative))

	# Run a blocking os call for upath in a worker thread.
	# Errors are re-raised against the upath rather than the host path.
	async def Syscall(this, upath, func, *args):
		try:
			return await asyncio.to_thread(func, *args)
		except OSError as err:
			if err.errno is None:
				raise
			raise OSError(err.errno, err.strerror, upath) from err

	async def Metadata(this, upath):
		st = await this.Syscall(upath, os.stat, this.HostPath(upath))
		return Metadata.FromStat(st)

	async def SymlinkMetadata(this, upath):
		st = await this.Syscall(upath, os.lstat, this.HostPath(upath))
		return Metadata.FromStat(st)

	async def ReadLink(this, upath):
		return await this.Syscall(upath, os.readlink, this.HostPath(upath))

	async def Symlink(this, target, upath):
		await this.Syscall(upath, os.symlink, os.fspath(target), this.HostPath(upath))

	async def CreateDirAll(this, upath):
		await this.Syscall(upath, os.makedirs, this.HostPath(upath), 0o777, True)

	async def Open(this, upath, options):
		try:
			return await FileOnDisk.Open(ResolveScope(upath), this.HostPath(upath), options)
		except OSError as err:
			if err.errno is None or err.filename == upath:
				raise
			raise OSError(err.errno, err.strerror, upath) from err

	async def SetPermissions(this, upath, mode):
		await this.Syscall(upath, os.chmod, this.HostPath(upath), mode & MODE_MASK)

	async def Chown(this, upath, uid, gid):
		await this.Syscall(upath, os.chown, this.HostPath(upath), uid, gid)

	async def ReadDir(this, upath):
		return await this.Syscall(upath, os.listdir, this.HostPath(upath))
