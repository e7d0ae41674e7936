"""
lib/fs/MemDisk.py

Purpose:
An in-memory filesystem. The whole tree lives in Python objects and disappears with the process.

Place in Architecture:
A Filesystem backend. Useful as a scratch destination, as a staging area, and for exercising the copy engine without touching the host.

Interface:

	MemDisk(uid=0, gid=0, name="MemDisk"): Empty tree with a root directory owned by uid:gid. New entries are owned by uid:gid as well.
	Implements every Filesystem method.
	Mknod(upath, fileType, mode=0o644): Create a special entry (fifo, socket, device). Not part of the Filesystem interface.

TODOs/FIXMEs:
None.
"""

import errno

from ..Upath import *
from .Filesystem import *
from .common.Resolve import *
from .File import *
from .Directory import *

class MemDisk(Filesystem):
	def __init__(this, uid=0, gid=0, name="MemDisk"):
		super().__init__(name)

		this.uid = uid
		this.gid = gid
		this.root = Directory(0o755, uid, gid)

	@staticmethod
	def GetChild(directory, name):
		return directory.GetChild(name)

	def Lookup(this, upath, follow=True):
		return ResolveInode(this.root, ResolveScope(upath), this.GetChild, follow=follow)

	def LookupParent(this, upath):
		return ResolveParent(this.root, upath, this.GetChild)

	async def Metadata(this, upath):
		return this.Lookup(upath).GetMetadata()

	async def SymlinkMetadata(this, upath):
		return this.Lookup(upath, follow=False).GetMetadata()

	async def ReadLink(this, upath):
		inode = this.Lookup(upath, follow=False)
		if (not inode.IsSymlink()):
			raise IOError(errno.EINVAL, "not a symbolic link", upath)
		return inode.target

	async def Symlink(this, target, upath):
		parent, name = this.LookupParent(upath)
		if (parent.GetChild(name) is not None):
			raise IOError(errno.EEXIST, "file exists", upath)
		parent.AddChild(name, Symlink(str(target), this.uid, this.gid))

	async def CreateDirAll(this, upath):
		prefix = ROOT
		for segment in usplit(ResolveScope(upath)):
			parent = this.Lookup(prefix)
			prefix = ujoin(prefix, segment)
			try:
				inode = this.Lookup(prefix)
			except IOError as err:
				if (err.errno != errno.ENOENT):
					raise
				if (parent.GetChild(segment) is not None):
					raise IOError(errno.EEXIST, "file exists as a dangling symlink", prefix)
				parent.AddChild(segment, Directory(0o755, this.uid, this.gid))
				continue

			if (not inode.IsDir()):
				raise IOError(errno.EEXIST, "file exists and is not a directory", prefix)

	async def Open(this, upath, options):
		options.Validate()
		upath = ResolveScope(upath)

		try:
			inode = this.Lookup(upath, follow=not options.create_new)
		except IOError as err:
			if (err.errno != errno.ENOENT or not (options.create or options.create_new)):
				raise
			parent, name = this.LookupParent(upath)
			inode = parent.AddChild(name, File(0o644, this.uid, this.gid))
		else:
			if (options.create_new):
				raise IOError(errno.EEXIST, "file exists", upath)
			if (inode.IsDir()):
				raise IOError(errno.EISDIR, "is a directory", upath)
			if (not inode.IsFile()):
				raise IOError(errno.ENXIO, f"cannot open {inode.fileType} entry", upath)

		return MemFileHandle(upath, inode, options)

	async def SetPermissions(this, upath, mode):
		this.Lookup(upath).SetMode(mode)

	async def Chown(this, upath, uid, gid):
		this.Lookup(upath).SetOwner(uid, gid)

	async def ReadDir(this, upath):
		inode = this.Lookup(upath)
		if (not inode.IsDir()):
			raise IOError(errno.ENOTDIR, "not a directory", upath)
		return inode.ListChildren()

	def Mknod(this, upath, fileType, mode=0o644):
		if (fileType in (FileType.FILE, FileType.DIRECTORY, FileType.SYMLINK)):
			raise IOError(errno.EINVAL, f"use the dedicated call to create a {fileType} entry", upath)
		parent, name = this.LookupParent(upath)
		return parent.AddChild(name, Inode(fileType, mode, this.uid, this.gid))
