"""
lib/copy/Discover.py

Purpose:
Lists every source path a copy has to replicate.

Place in Architecture:
The first step DiskDrive runs. A file scope is copied on its own; anything else is walked with lib/Walk.py.

Interface:

	scope_discover(srcScope, executor=drive): The ordered list of source upaths to copy.

TODOs/FIXMEs:
None.
"""

import logging

from ..Walk import *
from .common.CopyOp import *

# Failures anywhere in the walk are reported against the path the backend failed on, which may be nested well below srcScope.
class ScopeDiscover(CopyOp):
	def __init__(this, name="Discover"):
		super().__init__(name)

	async def Run(this, drive, srcScope):
		if (await drive.src.Metadata(srcScope)).IsFile():
			logging.debug(f"Copying src file {srcScope}")
			return [srcScope]

		logging.debug(f"Copying src dir {srcScope}")
		return await WalkOrdered(drive.src, srcScope)


scope_discover = ScopeDiscover()
