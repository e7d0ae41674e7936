"""
lib/Walk.py

Purpose:
Enumerates every path in a subtree of a Filesystem, in an order where each directory comes before anything nested beneath it.

Place in Architecture:
Feeds the copy engine. DiskDrive replicates paths strictly in the order returned here, so parents always exist on the destination before their contents.

Interface:

	WalkOrdered(fs, root="/"): Sorted, duplicate-free list of upaths, root included. Symlinks are listed but never descended into.

TODOs/FIXMEs:
None.
"""

import logging

from .Upath import *

async def WalkOrdered(fs, root=ROOT):
	"""
	Walk through every entry below root, starting from root itself.

	Returns
	-------
	list of str
		Upaths sorted by string, so a directory always sorts before its
		descendants ("/a" < "/a/b"), without duplicates.

	"""
	root = ResolveScope(root)
	found = {root}
	stack = []

	if (await fs.SymlinkMetadata(root)).IsDir():
		stack.append(root)

	# Walk the tree
	while stack:
		upath = stack.pop()
		for name in await fs.ReadDir(upath):
			child = ujoin(upath, name)
			found.add(child)
			if (await fs.SymlinkMetadata(child)).IsDir():
				stack.append(child)

	logging.debug(f"Found {len(found)} entries below {root} on {fs}")
	return sorted(found)
