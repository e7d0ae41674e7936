"""
lib/fs/SqlDisk.py

Purpose:
A filesystem stored in an SQL database through SQLAlchemy. Every entry is one InodeModel row; file content is kept in the row itself.

Place in Architecture:
A Filesystem backend. Shares the tree resolution logic of MemDisk (lib/fs/common/Resolve.py), with rows in place of in-memory inodes.

Interface:

	SqlDisk(url="sqlite://", uid=0, gid=0, name=None): Connects, creates the table and the root directory if missing.
	GetDatabaseSession(): A new SQLAlchemy Session. Use it in a `with` block.
	Implements every Filesystem method.
	SqlFileHandle: Buffers the file in memory and writes it back on Flush() / Close().

TODOs/FIXMEs:
Database calls run on the event loop's thread. That is fine for SQLite; a networked database should move them to worker threads.
"""

import errno
import logging

import sqlalchemy as sql
import sqlalchemy.orm as orm

from ..Upath import *
from ..db.InodeModel import *
from .Filesystem import *
from .common.Handle import *
from .common.Resolve import *

class SqlDisk(Filesystem):
	def __init__(this, url="sqlite://", uid=0, gid=0, name=None):
		super().__init__(name or f"SqlDisk({url})")

		this.url = url
		this.uid = uid
		this.gid = gid

		this.engine = sql.create_engine(url)
		Base.metadata.create_all(this.engine)
		this.CreateRoot()

	def GetDatabaseSession(this):
		return orm.Session(this.engine)

	def CreateRoot(this):
		with this.GetDatabaseSession() as session:
			if this.GetRoot(session) is not None:
				return
			session.add(InodeModel(
				parent=None,
				name="",
				kind=FileType.DIRECTORY.value,
				mode=0o755,
				uid=this.uid,
				gid=this.gid
			))
			session.commit()
			logging.debug(f"Created root directory in {this.url}")

	def GetRoot(this, session):
		return session.query(InodeModel).filter(InodeModel.parent.is_(None)).one_or_none()

	@staticmethod
	def ChildGetter(session):
		def GetChild(directory, name):
			return session.query(InodeModel).filter_by(parent=directory.id, name=name).one_or_none()
		return GetChild

	def Lookup(this, session, upath, follow=True):
		return ResolveInode(this.GetRoot(session), ResolveScope(upath), this.ChildGetter(session), follow=follow)

	def LookupParent(this, session, upath):
		return ResolveParent(this.GetRoot(session), upath, this.ChildGetter(session))

	def AddChild(this, session, parent, name, **kw):
		if this.ChildGetter(session)(parent, name) is not None:
			raise IOError(errno.EEXIST, "file exists", name)
		inode = InodeModel(parent=parent.id, name=name, uid=this.uid, gid=this.gid, **kw)
		session.add(inode)
		session.flush()
		return inode

	async def Metadata(this, upath):
		with this.GetDatabaseSession() as session:
			return this.Lookup(session, upath).GetMetadata()

	async def SymlinkMetadata(this, upath):
		with this.GetDatabaseSession() as session:
			return this.Lookup(session, upath, follow=False).GetMetadata()

	async def ReadLink(this, upath):
		with this.GetDatabaseSession() as session:
			inode = this.Lookup(session, upath, follow=False)
			if not inode.IsSymlink():
				raise IOError(errno.EINVAL, "not a symbolic link", upath)
			return inode.target

	async def Symlink(this, target, upath):
		with this.GetDatabaseSession() as session:
			parent, name = this.LookupParent(session, upath)
			try:
				this.AddChild(session, parent, name, kind=FileType.SYMLINK.value, mode=0o777, target=str(target))
			except IOError as err:
				raise IOError(err.errno, err.strerror, upath)
			session.commit()

	async def CreateDirAll(this, upath):
		with this.GetDatabaseSession() as session:
			prefix = ROOT
			for segment in usplit(ResolveScope(upath)):
				parent = this.Lookup(session, prefix)
				prefix = ujoin(prefix, segment)
				try:
					inode = this.Lookup(session, prefix)
				except IOError as err:
					if err.errno != errno.ENOENT:
						raise
					if this.ChildGetter(session)(parent, segment) is not None:
						raise IOError(errno.EEXIST, "file exists as a dangling symlink", prefix)
					this.AddChild(session, parent, segment, kind=FileType.DIRECTORY.value, mode=0o755)
					continue

				if not inode.IsDir():
					raise IOError(errno.EEXIST, "file exists and is not a directory", prefix)

			session.commit()

	async def Open(this, upath, options):
		options.Validate()
		upath = ResolveScope(upath)

		with this.GetDatabaseSession() as session:
			try:
				inode = this.Lookup(session, upath, follow=not options.create_new)
			except IOError as err:
				if err.errno != errno.ENOENT or not (options.create or options.create_new):
					raise
				parent, name = this.LookupParent(session, upath)
				inode = this.AddChild(session, parent, name, kind=FileType.FILE.value, mode=0o644, data=b"")
			else:
				if options.create_new:
					raise IOError(errno.EEXIST, "file exists", upath)
				if inode.IsDir():
					raise IOError(errno.EISDIR, "is a directory", upath)
				if not inode.IsFile():
					raise IOError(errno.ENXIO, f"cannot open {inode.GetFileType()} entry", upath)

			if options.truncate:
				inode.data = b""

			handle = SqlFileHandle(this, upath, inode.id, inode.data or b"", options)
			session.commit()
			return handle

	async def SetPermissions(this, upath, mode):
		with this.GetDatabaseSession() as session:
			this.Lookup(session, upath).mode = mode & MODE_MASK
			session.commit()

	async def Chown(this, upath, uid, gid):
		with this.GetDatabaseSession() as session:
			inode = this.Lookup(session, upath)
			inode.uid = uid
			inode.gid = gid
			session.commit()

	async def ReadDir(this, upath):
		with this.GetDatabaseSession() as session:
			inode = this.Lookup(session, upath)
			if not inode.IsDir():
				raise IOError(errno.ENOTDIR, "not a directory", upath)
			return [name for (name,) in session.query(InodeModel.name).filter_by(parent=inode.id)]


# Logical file handle. The content is buffered for the lifetime of the handle.
class SqlFileHandle(Handle):
	def __init__(this, disk, upath, id, data, options):
		super().__init__(upath, options)
		this.disk = disk
		this.id = id
		this.buffer = bytearray(data)
		this.offset = 0
		this.dirty = False

	def GetInode(this, session):
		inode = session.query(InodeModel).filter_by(id=this.id).one_or_none()
		if inode is None:
			raise IOError(errno.ENOENT, "file was removed", this.upath)
		return inode

	async def Read(this, size=-1):
		this.CheckReadable()

		if size is None or size < 0:
			end = len(this.buffer)
		else:
			end = min(len(this.buffer), this.offset + size)

		block = bytes(this.buffer[this.offset:end])
		this.offset = max(this.offset, end)
		return block

	async def Write(this, data):
		this.CheckWriteable()

		if this.options.append:
			this.offset = len(this.buffer)
		if this.offset > len(this.buffer):
			this.buffer.extend(b"\x00" * (this.offset - len(this.buffer)))

		this.buffer[this.offset:this.offset + len(data)] = data
		this.offset += len(data)
		this.dirty = True
		return len(data)

	async def Flush(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)
		if not this.dirty:
			return

		with this.disk.GetDatabaseSession() as session:
			this.GetInode(session).data = bytes(this.buffer)
			session.commit()
		this.dirty = False

	async def Metadata(this):
		if this.closed:
			raise IOError(errno.EBADF, "file is closed", this.upath)

		with this.disk.GetDatabaseSession() as session:
			inode = this.GetInode(session)
			return Metadata(inode.GetFileType(), inode.mode, inode.uid, inode.gid, len(this.buffer))

	async def Close(this):
		if this.closed:
			return
		try:
			await this.Flush()
		finally:
			this.closed = True
