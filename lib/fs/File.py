"""
lib/fs/File.py

Purpose:
Implements a File inode (subclass of Inode) specialized for regular files, plus the handle used to read and write it.

Place in Architecture:
Holds file content for MemDisk. MemFileHandle is what MemDisk.Open() returns for a File.

Interface:

	File(mode, uid, gid): A regular file with empty content.
	MemFileHandle(upath, inode, options): Handle with a private offset into the inode's data.

TODOs/FIXMEs:
None.
"""

import errno

from .common.Inode import *
from .common.Handle import *

class File (Inode):
	def __init__(this, mode=0o644, uid=0, gid=0):
		super().__init__(FileType.FILE, mode, uid, gid)

		this.data = bytearray()

	def GetSize(this):
		return len(this.data)

	def Truncate(this, size=0):
		del this.data[size:]


# Logical file handle. There may be multiple open handles on the same File.
class MemFileHandle (Handle):
	def __init__(this, upath, inode, options):
		super().__init__(upath, options)
		this.inode = inode
		this.offset = 0

		if (options.truncate):
			this.inode.Truncate()

	async def Read(this, size=-1):
		this.CheckReadable()

		data = this.inode.data
		if (size is None or size < 0):
			end = len(data)
		else:
			end = min(len(data), this.offset + size)

		block = bytes(data[this.offset:end])
		this.offset = max(this.offset, end)
		return block

	async def Write(this, data):
		this.CheckWriteable()

		if (this.options.append):
			this.offset = len(this.inode.data)

		if (this.offset > len(this.inode.data)):
			this.inode.data.extend(b"\x00" * (this.offset - len(this.inode.data)))

		this.inode.data[this.offset:this.offset + len(data)] = data
		this.offset += len(data)
		return len(data)

	async def Metadata(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)
		return this.inode.GetMetadata()
