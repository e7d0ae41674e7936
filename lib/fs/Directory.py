"""
lib/fs/Directory.py

Purpose:
Implements a Directory inode (subclass of Inode) specialized for directories, and the Symlink inode.

Place in Architecture:
Directories form MemDisk's tree. Each stores its children by name; a child may be any Inode.

Interface:

	Directory(mode, uid, gid):
		GetChild(name), AddChild(name, inode), ListChildren()
	Symlink(target, uid, gid): A symlink inode pointing to target.

TODOs/FIXMEs:
None.
"""

import errno

from .common.Inode import *

class Directory (Inode):
	def __init__(this, mode=0o755, uid=0, gid=0):
		super().__init__(FileType.DIRECTORY, mode, uid, gid)

		this.children = {} # name -> Inode

	def GetSize(this):
		return len(this.children)

	# RETURNS the child inode called name or None.
	def GetChild(this, name):
		return this.children.get(name)

	def AddChild(this, name, inode):
		if (name in this.children):
			raise IOError(errno.EEXIST, "file exists", name)
		this.children[name] = inode
		return inode

	def ListChildren(this):
		return list(this.children.keys())


# Symlinks are always created with all permission bits set, like on Linux.
class Symlink (Inode):
	def __init__(this, target, uid=0, gid=0):
		super().__init__(FileType.SYMLINK, 0o777, uid, gid)

		this.target = target

	def GetSize(this):
		return len(this.target.encode('utf-8'))
