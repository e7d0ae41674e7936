"""
lib/fs/Filesystem.py

Purpose:
The capability set every storage backend exposes. The copy engine talks to source and destination exclusively through this interface and never learns which concrete backend it holds.

Place in Architecture:
Base class of MemDisk, OsDisk and SqlDisk. A copy operation holds two independent instances, which need not be of the same class.

Interface:

	All methods are coroutines taking absolute upaths. Failures raise IOError/OSError with an errno and the offending path.
	Metadata(upath): Metadata, following symlinks.
	SymlinkMetadata(upath): Metadata of the entry itself.
	ReadLink(upath): The target string of a symlink. EINVAL if upath is not a symlink.
	Symlink(target, upath): Create a symlink at upath pointing to target.
	CreateDirAll(upath): Create upath and all missing ancestors. Succeeds if it already is a directory.
	Open(upath, options): An open Handle.
	SetPermissions(upath, mode): Set all permission bits.
	Chown(upath, uid, gid): Set owning user and group.
	ReadDir(upath): Names of the entries in a directory.

TODOs/FIXMEs:
None.
"""

# Override every method here in your child class.
class Filesystem(object):
	def __init__(this, name="Filesystem"):
		this.name = name

	def __repr__(this):
		return f"<{this.__class__.__name__} {this.name}>"

	async def Metadata(this, upath):
		raise NotImplementedError

	async def SymlinkMetadata(this, upath):
		raise NotImplementedError

	async def ReadLink(this, upath):
		raise NotImplementedError

	async def Symlink(this, target, upath):
		raise NotImplementedError

	async def CreateDirAll(this, upath):
		raise NotImplementedError

	async def Open(this, upath, options):
		raise NotImplementedError

	async def SetPermissions(this, upath, mode):
		raise NotImplementedError

	async def Chown(this, upath, uid, gid):
		raise NotImplementedError

	async def ReadDir(this, upath):
		raise NotImplementedError
