"""
lib/copy/Permissions.py

Purpose:
Applies a source entry's ownership and permission bits to a destination path.

Place in Architecture:
Final step of the File Replicator, once the content is in place.

Interface:

	permissions_copy(fs, upath, metadata): Chown to metadata.uid / metadata.gid, then set metadata.mode.

TODOs/FIXMEs:
None.
"""

import logging

# Ownership first: changing the owner of a file clears its setuid and setgid bits.
# Both calls are required. Lacking the privilege to chown is an error, never ignored.
async def permissions_copy(fs, upath, metadata):
	logging.debug(f"Setting {upath} to {metadata.uid}:{metadata.gid} {oct(metadata.mode)}")
	await fs.Chown(upath, metadata.uid, metadata.gid)
	await fs.SetPermissions(upath, metadata.mode)
