from .Filesystem import Filesystem
from .MemDisk import MemDisk
from .OsDisk import OsDisk
from .SqlDisk import SqlDisk
from .common.Metadata import FileType, Metadata
from .common.OpenOptions import OpenOptions
from .common.Handle import Handle
