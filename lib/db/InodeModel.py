"""
lib/db/InodeModel.py

Purpose:
Defines the SQLAlchemy ORM model for the inodes of an SqlDisk. One row per filesystem entry: its place in the tree, its metadata and its payload.

Place in Architecture:
Persistent storage for SqlDisk. Rows are looked up by (parent, name), which makes every directory a simple query.

Interface:

	Base: The declarative base; Base.metadata.create_all() creates the table.
	InodeModel columns: id, parent, name, kind, mode, uid, gid, target, data.
	IsFile(), IsDir(), IsSymlink(), GetFileType(), GetMetadata()

TODOs/FIXMEs:
Directory listings load whole rows, including file data. Defer the data column if listings get slow.
"""

import sqlalchemy as sql
import sqlalchemy.orm as orm

from ..fs.common.Metadata import *

Base = orm.declarative_base()

# Inodes store the usable metadata for files and directories.
# Each has an id that is the primary key. The root is the only row without a parent.
class InodeModel(Base):
	__tablename__ = 'fs'
	__table_args__ = (sql.UniqueConstraint('parent', 'name'),)

	# Lookup info.
	id = sql.Column(sql.Integer, primary_key=True)
	parent = sql.Column(sql.Integer, sql.ForeignKey('fs.id'), nullable=True, index=True)
	name = sql.Column(sql.String, nullable=False)
	kind = sql.Column(sql.String, nullable=False) # FileType value.

	# Filesystem data.
	mode = sql.Column(sql.Integer, nullable=False, default=0o644)
	uid = sql.Column(sql.Integer, nullable=False, default=0)
	gid = sql.Column(sql.Integer, nullable=False, default=0)
	target = sql.Column(sql.String, nullable=True) # Only for symlinks.
	data = sql.Column(sql.LargeBinary, nullable=True) # Only for files.

	def __repr__(this):
		return f"<{this.name} ({this.id}) {this.kind} in {this.parent}>"

	def GetFileType(this):
		return FileType(this.kind)

	def IsFile(this):
		return this.kind == FileType.FILE.value

	def IsDir(this):
		return this.kind == FileType.DIRECTORY.value

	def IsSymlink(this):
		return this.kind == FileType.SYMLINK.value

	def GetMetadata(this):
		if this.IsFile():
			size = len(this.data or b"")
		elif this.IsSymlink():
			size = len(this.target.encode('utf-8'))
		else:
			size = 0
		return Metadata(this.GetFileType(), this.mode, this.uid, this.gid, size)
