from .DISKDRIVE import main

main()
