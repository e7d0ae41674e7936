"""
FileOnDisk: an open file on the host filesystem.

A thin asynchronous wrapper around a raw OS file descriptor. Blocking system
calls are pushed to worker threads so the event loop stays responsive.

Locking follows BSD flock semantics: a shared lock while reading, an exclusive
lock while writing. Truncation happens only after the lock is held.
"""

import os
import stat
import errno
import fcntl
import asyncio

from .Utils import *
from .fs.common.Handle import *
from .fs.common.Metadata import *

class FileOnDisk(Handle):
	"""
	A file opened through OsDisk.

	*upath* is the path as seen by the copy engine, *path* the real host path.
	Use FileOnDisk.Open() rather than the constructor.
	"""
	def __init__(this, upath, path, options, fd):
		super().__init__(upath, options)
		this.path = path
		this.fd = fd

	@classmethod
	def OpenSync(cls, upath, path, options):
		flags = options.ToFlags() & ~os.O_TRUNC
		fd = os.open(path, flags, 0o666)

		try:
			if stat.S_ISDIR(os.fstat(fd).st_mode):
				raise IOError(errno.EISDIR, "is a directory", upath)

			# BSD file locking: shared lock for read-only, exclusive for writing.
			if options.IsWriteable():
				fcntl.flock(fd, fcntl.LOCK_EX)
			else:
				fcntl.flock(fd, fcntl.LOCK_SH)

			# Truncate after locking.
			if options.truncate:
				os.ftruncate(fd, 0)
		except Exception:
			os.close(fd)
			raise

		return cls(upath, path, options, fd)

	@classmethod
	async def Open(cls, upath, path, options):
		return await asyncio.to_thread(cls.OpenSync, upath, path, options)

	def ReadSync(this, size):
		if size is not None and size >= 0:
			return os.read(this.fd, size)

		blocks = []
		while True:
			block = os.read(this.fd, BLOCK_SIZE)
			if not block:
				break
			blocks.append(block)
		return b"".join(blocks)

	def WriteSync(this, data):
		view = memoryview(data)
		while view:
			written = os.write(this.fd, view)
			view = view[written:]
		return len(data)

	async def Read(this, size=-1):
		this.CheckReadable()
		return await asyncio.to_thread(this.ReadSync, size)

	async def Write(this, data):
		this.CheckWriteable()
		return await asyncio.to_thread(this.WriteSync, data)

	async def Flush(this):
		# Writes go straight to the descriptor; nothing is buffered here.
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)

	async def Metadata(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)
		st = await asyncio.to_thread(os.fstat, this.fd)
		return Metadata.FromStat(st)

	async def Close(this):
		if this.closed:
			return
		this.closed = True
		await asyncio.to_thread(os.close, this.fd)
