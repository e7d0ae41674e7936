"""
lib/fs/common/OpenOptions.py

Purpose:
Describes how a file should be opened: which of read, write, create, create_new, truncate and append apply.

Place in Architecture:
Passed to Filesystem.Open() by the copy engine. Each backend checks the combination with Validate() before touching storage.

Interface:

	OpenOptions(read=False, write=False, create=False, create_new=False, truncate=False, append=False)
	Validate(): Raises IOError(EINVAL) for contradictory combinations.
	ToFlags(): The equivalent os.open() flags.

TODOs/FIXMEs:
None.
"""

import os
import errno

class OpenOptions(object):
	def __init__(this, read=False, write=False, create=False, create_new=False, truncate=False, append=False):
		this.read = read
		this.write = write
		this.create = create
		this.create_new = create_new
		this.truncate = truncate
		this.append = append

	def __repr__(this):
		flags = [name for name in ('read', 'write', 'create', 'create_new', 'truncate', 'append') if getattr(this, name)]
		return f"<OpenOptions {'|'.join(flags) or 'none'}>"

	def Validate(this):
		if not (this.read or this.write or this.append):
			raise IOError(errno.EINVAL, "file must be opened for reading or writing")

		writeable = this.write or this.append
		if this.create and not writeable:
			raise IOError(errno.EINVAL, "create without writeable file")
		if this.create_new and not writeable:
			raise IOError(errno.EINVAL, "create_new without writeable file")
		if this.truncate and not writeable:
			raise IOError(errno.EINVAL, "truncate without writeable file")
		if this.truncate and this.append:
			raise IOError(errno.EINVAL, "truncate together with append")

	def IsWriteable(this):
		return this.write or this.append

	def ToFlags(this):
		this.Validate()

		if this.read and this.IsWriteable():
			flags = os.O_RDWR
		elif this.IsWriteable():
			flags = os.O_WRONLY
		else:
			flags = os.O_RDONLY

		if this.create_new:
			flags |= os.O_CREAT | os.O_EXCL
		elif this.create:
			flags |= os.O_CREAT
		if this.truncate:
			flags |= os.O_TRUNC
		if this.append:
			flags |= os.O_APPEND

		return flags
