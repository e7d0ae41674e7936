"""
lib/Upath.py

Purpose:
Normalizes the paths (upaths) used on every filesystem backend. Upaths are always absolute, forward-slash separated and free of "." and ".." segments, regardless of the host platform.

Place in Architecture:
Used by the copy engine to resolve source and destination scopes and to compute where each discovered source path lands on the destination. Also used by the backends to split paths into segments.

Interface:

	ROOT: The root upath, "/".
	ResolveScope(path=None): Absolute, normalized upath for an optional str or PathLike. None is the root.
	JoinDestination(destScope, srcPath): Where srcPath lands below destScope.
	Scope(path=None): A str holding ResolveScope(path). Used as the type of Functor args that are upaths.
	udirname(upath), ubasename(upath), usplit(upath), ujoin(upath, name)

TODOs/FIXMEs:
None.
"""

import os
import posixpath

ROOT = "/"

def ResolveScope(path=None):
	if (path is None):
		return ROOT

	path = os.fspath(path)
	if (isinstance(path, bytes)):
		path = os.fsdecode(path)
	path = path.replace(os.sep, "/")

	if (not path.startswith(ROOT)):
		path = ROOT + path

	path = posixpath.normpath(path)

	# POSIX keeps a leading "//"; upaths never do.
	return ROOT + path.lstrip(ROOT)


# Setting an arg of this type resolves it instead of letting it be evaluated as an expression or number.
class Scope(str):
	def __new__(cls, path=None):
		return super().__new__(cls, ResolveScope(path))


# The source path is taken relative to the root, so a root destScope reproduces the source layout verbatim and any other destScope re-roots it.
def JoinDestination(destScope, srcPath):
	relative = ResolveScope(srcPath).lstrip(ROOT)
	if (not relative):
		return ResolveScope(destScope)
	return ResolveScope(posixpath.join(ResolveScope(destScope), relative))


def udirname(upath):
	return posixpath.dirname(ResolveScope(upath))


def ubasename(upath):
	return posixpath.basename(ResolveScope(upath))


# RETURNS the names along upath, e.g. "/a/b" -> ["a", "b"] and "/" -> [].
def usplit(upath):
	return [segment for segment in upath.split("/") if segment]


def ujoin(upath, name):
	return ResolveScope(posixpath.join(ResolveScope(upath), name))
