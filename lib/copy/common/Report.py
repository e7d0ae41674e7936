"""
lib/copy/common/Report.py

Purpose:
Records what a copy operation did: the destination paths it wrote and the source paths it skipped.

Place in Architecture:
Created by DiskDrive.Copy() and filled in by the replicators. Returned to the caller of every copy operation.

Interface:

	CopyReport(srcScope, destScope): files, directories, symlinks (destination upaths) and skipped ((source upath, reason) pairs).
	Skip(upath, reason)

TODOs/FIXMEs:
None.
"""

class CopyReport(object):
	def __init__(this, srcScope, destScope):
		this.srcScope = srcScope
		this.destScope = destScope

		this.files = []
		this.directories = []
		this.symlinks = []
		this.skipped = []

	def __str__(this):
		return f"{len(this.files)} files, {len(this.directories)} directories, {len(this.symlinks)} symlinks, {len(this.skipped)} skipped"

	def __repr__(this):
		return f"<CopyReport {this.srcScope} -> {this.destScope}: {this}>"

	def Skip(this, upath, reason):
		this.skipped.append((upath, reason))
