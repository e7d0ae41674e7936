from .DISKDRIVE import DISKDRIVE, OpenDisk, main
