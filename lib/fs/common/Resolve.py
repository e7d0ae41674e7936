"""
lib/fs/common/Resolve.py

Purpose:
Path resolution for backends that store their own inode tree (MemDisk, SqlDisk). Walks a upath segment by segment from the root inode, expanding symlinks the way a POSIX kernel would.

Place in Architecture:
The only place tree-backed filesystems turn a upath into an inode. Backends supply the root and a child lookup; nodes must provide IsDir(), IsSymlink() and a `target` attribute.

Interface:

	ResolveInode(root, upath, GetChild, follow=True): The inode at upath.
	ResolveParent(root, upath, GetChild): (parent directory inode, entry name) for creating upath.

TODOs/FIXMEs:
None.
"""

import errno
from collections import deque

from ...Upath import *

# Same limit as Linux.
MAX_SYMLINKS = 40

# Resolve upath to an inode.
# Symlinks in intermediate segments are always followed. The final segment is followed only if *follow* is set.
# GetChild(directory, name) must RETURN the child inode or None.
def ResolveInode(root, upath, GetChild, follow=True):
	segments = deque(usplit(upath))
	stack = [root] # Directories from the root down to the current one.
	node = root
	hops = 0

	while segments:
		name = segments.popleft()
		if (name in ('', '.')):
			continue
		if (name == '..'):
			if (len(stack) > 1):
				stack.pop()
			node = stack[-1]
			continue

		if (not node.IsDir()):
			raise IOError(errno.ENOTDIR, "not a directory", upath)

		child = GetChild(node, name)
		if (child is None):
			raise IOError(errno.ENOENT, "no such file or directory", upath)

		if (child.IsSymlink() and (segments or follow)):
			hops += 1
			if (hops > MAX_SYMLINKS):
				raise IOError(errno.ELOOP, "too many levels of symbolic links", upath)

			if (child.target.startswith(ROOT)):
				stack = [root]
			segments.extendleft(reversed(child.target.split('/')))
			node = stack[-1]
			continue

		stack.append(child)
		node = child

	return node


# RETURNS the directory that should hold upath and the name upath should have inside it.
def ResolveParent(root, upath, GetChild):
	upath = ResolveScope(upath)
	if (upath == ROOT):
		raise IOError(errno.EEXIST, "root directory already exists", upath)

	parent = ResolveInode(root, udirname(upath), GetChild)
	if (not parent.IsDir()):
		raise IOError(errno.ENOTDIR, "not a directory", upath)

	return parent, ubasename(upath)
