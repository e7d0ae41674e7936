"""
lib/fs/common/Metadata.py

Purpose:
Defines the file type enumeration and the metadata snapshot every filesystem backend returns for a path.

Place in Architecture:
Shared vocabulary between the backends (MemDisk, OsDisk, SqlDisk) and the copy engine. The copy engine only ever inspects entries through these objects.

Interface:

	FileType: FILE, DIRECTORY, SYMLINK, FIFO, SOCKET, CHARACTER_DEVICE, BLOCK_DEVICE, UNKNOWN.
	Metadata(fileType, mode, uid, gid, size=0):
		IsFile(), IsDir(), IsSymlink()
		FromStat(st): Builds a snapshot from an os.stat_result.

TODOs/FIXMEs:
None.
"""

import stat
from enum import Enum

# Permission bits, including setuid, setgid and sticky.
MODE_MASK = 0o7777

class FileType(Enum):
	FILE = 'file'
	DIRECTORY = 'dir'
	SYMLINK = 'symlink'
	FIFO = 'fifo'
	SOCKET = 'socket'
	CHARACTER_DEVICE = 'chardev'
	BLOCK_DEVICE = 'blockdev'
	UNKNOWN = 'unknown'

	def __str__(self):
		return self.name

	@classmethod
	def FromMode(cls, mode):
		if (stat.S_ISLNK(mode)):
			return cls.SYMLINK
		if (stat.S_ISDIR(mode)):
			return cls.DIRECTORY
		if (stat.S_ISREG(mode)):
			return cls.FILE
		if (stat.S_ISFIFO(mode)):
			return cls.FIFO
		if (stat.S_ISSOCK(mode)):
			return cls.SOCKET
		if (stat.S_ISCHR(mode)):
			return cls.CHARACTER_DEVICE
		if (stat.S_ISBLK(mode)):
			return cls.BLOCK_DEVICE
		return cls.UNKNOWN


# A point-in-time snapshot of an entry. Never cached by the copy engine.
class Metadata(object):
	def __init__(this, fileType, mode, uid, gid, size=0):
		this.fileType = fileType
		this.mode = mode & MODE_MASK
		this.uid = uid
		this.gid = gid
		this.size = size

	def __repr__(this):
		return f"<Metadata {this.fileType} mode={oct(this.mode)} uid={this.uid} gid={this.gid} size={this.size}>"

	def __eq__(this, other):
		if (not isinstance(other, Metadata)):
			return NotImplemented
		return (this.fileType, this.mode, this.uid, this.gid, this.size) == (other.fileType, other.mode, other.uid, other.gid, other.size)

	def IsFile(this):
		return this.fileType == FileType.FILE

	def IsDir(this):
		return this.fileType == FileType.DIRECTORY

	def IsSymlink(this):
		return this.fileType == FileType.SYMLINK

	@classmethod
	def FromStat(cls, st):
		return cls(
			FileType.FromMode(st.st_mode),
			stat.S_IMODE(st.st_mode),
			st.st_uid,
			st.st_gid,
			st.st_size
		)
