"""
lib/fs/common/Inode.py

Purpose:
Provides the base class for all in-memory inodes (files, directories, symlinks and special entries). It holds the metadata shared by every kind of entry: type, permission bits and ownership.

Place in Architecture:
The storage unit of MemDisk. Child classes in lib/fs/ add the kind-specific payload (file bytes, directory children, symlink target).

Interface:

	__init__(fileType, mode, uid, gid): Initializes an inode.
	IsFile(), IsDir(), IsSymlink()
	GetSize(): Size reported in Metadata. Override in your child class.
	GetMetadata(): A fresh Metadata snapshot.
	SetMode(mode), SetOwner(uid, gid)

TODOs/FIXMEs:
None.
"""

import itertools

from .Metadata import *

# Mock inode numbers, unique per process.
_inodeIds = itertools.count(1)

class Inode(object):
	def __init__(this, fileType, mode, uid=0, gid=0):
		this.id = next(_inodeIds)
		this.fileType = fileType
		this.mode = mode & MODE_MASK
		this.uid = uid
		this.gid = gid
		this.target = None # Only meaningful for symlinks.

	def __repr__(this):
		return f"<{this.__class__.__name__} ({this.id}) {this.fileType} {oct(this.mode)} {this.uid}:{this.gid}>"

	def IsFile(this):
		return this.fileType == FileType.FILE

	def IsDir(this):
		return this.fileType == FileType.DIRECTORY

	def IsSymlink(this):
		return this.fileType == FileType.SYMLINK

	# Override this in your child class.
	def GetSize(this):
		return 0

	def GetMetadata(this):
		return Metadata(this.fileType, this.mode, this.uid, this.gid, this.GetSize())

	def SetMode(this, mode):
		this.mode = mode & MODE_MASK

	def SetOwner(this, uid, gid):
		this.uid = uid
		this.gid = gid
