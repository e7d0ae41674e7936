"""
lib/copy/Classify.py

Purpose:
Determines what kind of entry a discovered source path is: symlink, directory, file or something else.

Place in Architecture:
Called by DiskDrive for every discovered path; the answer picks the replicator.

Interface:

	entry_classify(upath, executor=drive): The FileType of the entry at upath on the source, without following a final symlink.

TODOs/FIXMEs:
None.
"""


from ..fs.common.Metadata import *
from .common.CopyOp import *

# Reading the link first means the entry is never dereferenced when it is a symlink.
class EntryClassify(CopyOp):
	def __init__(this, name="EntryClassify"):
		super().__init__(name)

	async def Run(this, drive, upath):
		try:
			await drive.src.ReadLink(upath)
		except OSError:
			return (await drive.src.Metadata(upath)).fileType
		return FileType.SYMLINK


entry_classify = EntryClassify()
