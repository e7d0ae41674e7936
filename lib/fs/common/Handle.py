"""
lib/fs/common/Handle.py

Purpose:
Base class for an open file on any filesystem backend.

Place in Architecture:
Returned by Filesystem.Open(). The copy engine streams bytes between a source handle and a destination handle and reads the source's metadata through it.

Interface:

	__init__(upath, options): Records the path and the OpenOptions used.
	Read(size=-1), Write(data), Flush(), Metadata(), Close(): coroutines, implemented by each backend.
	Async context manager: closes on exit.

TODOs/FIXMEs:
None.
"""

import errno

class Handle(object):
	def __init__(this, upath, options):
		this.upath = upath
		this.options = options
		this.closed = False

	def __repr__(this):
		return f"<{this.__class__.__name__} {this.upath} {this.options}>"

	async def __aenter__(this):
		return this

	async def __aexit__(this, excType, exc, tb):
		await this.Close()

	def CheckReadable(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)
		if not this.options.read:
			raise IOError(errno.EBADF, "file not open for reading", this.upath)

	def CheckWriteable(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)
		if not this.options.IsWriteable():
			raise IOError(errno.EBADF, "file not open for writing", this.upath)

	# Read up to size bytes. A negative size reads to the end of the file.
	# RETURNS b"" at end of file.
	async def Read(this, size=-1):
		raise NotImplementedError

	# RETURNS the number of bytes written, which is always len(data).
	async def Write(this, data):
		raise NotImplementedError

	async def Flush(this):
		pass

	# RETURNS the Metadata of the open file.
	async def Metadata(this):
		raise NotImplementedError

	# Closing twice is allowed.
	async def Close(this):
		this.closed = True
