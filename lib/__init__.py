from .Upath import ROOT, ResolveScope, JoinDestination
from .Utils import BLOCK_SIZE, CopyStream
from .Walk import WalkOrdered
from .fs import *
from .copy.common.CopyOp import CopyError
from .copy.common.Report import CopyReport
from .DiskDrive import DiskDrive, copy_between, copy_from_src, copy_to_dest, copy_from_src_to_dest
