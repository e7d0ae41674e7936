import os
import sys
import asyncio
import argparse
import logging
import logging.handlers

from sqlalchemy.exc import SQLAlchemyError

from libdiskdrive import OsDisk, SqlDisk, CopyError, copy_from_src_to_dest

from .Utils import *

# Open the Filesystem a command line argument names.
# Anything containing "://" is a database URL; everything else is a directory on this host.
def OpenDisk(spec, create=False):
	if "://" in spec:
		return SqlDisk(spec)

	if create and not os.path.isdir(spec):
		os.makedirs(spec)
	return OsDisk(spec)


# DiskDrive copies everything from one filesystem to another.
# Name is caps to match the executable.
class DISKDRIVE(object):
	def __init__(this, name="diskdrive"):
		this.name = name

		this.parser = argparse.ArgumentParser(prog=name, description="Copy a file or directory tree between filesystems, keeping symlinks, permissions and ownership.")
		this.parser.add_argument('src', help="Source: a directory, or a database URL (e.g. sqlite:///src.db)")
		this.parser.add_argument('dest', help="Destination: a directory (created if missing), or a database URL")
		this.parser.add_argument('-s', '--src-scope', dest='src_scope', default=None,
								 help="Path inside the source to copy. Default: /")
		this.parser.add_argument('-d', '--dest-scope', dest='dest_scope', default=None,
								 help="Path inside the destination to copy into. Default: /")
		this.parser.add_argument('-b', '--chunk-size', dest='chunk_size', default='128KiB',
								 help="Bytes moved per read / write. Default: 128KiB")
		this.parser.add_argument('-l', '--log-level', dest='log_level', default='warning',
								 help="Log level (error, warning, info, debug). Default: warning")
		this.parser.add_argument('--syslog', dest='syslog', action='store_true',
								 help="Log to syslog instead of the console")

	def ConfigureLogging(this, log_level, syslog=False):
		logger = logging.getLogger('')
		if not syslog:
			# console logging only
			handler = logging.StreamHandler()
			fmt = logging.Formatter(fmt=("%(asctime)s " + this.name + "[%(process)d]: %(levelname)s: %(message)s"))
		else:
			handler = logging.handlers.SysLogHandler(address='/dev/log')
			fmt = logging.Formatter(fmt=(this.name + "[%(process)d]: %(levelname)s: %(message)s"))

		handler.setFormatter(fmt)
		logger.addHandler(handler)
		logger.setLevel(log_level)
		return handler

	# RETURNS the process exit status.
	def main(this, args=None):
		options = this.parser.parse_args(args)

		try:
			log_level = parse_log_level(options.log_level)
		except ValueError:
			print(("error: --log-level %r is not a valid log level" % (options.log_level,)))
			return 1

		try:
			chunk_size = parse_size(options.chunk_size)
			if not chunk_size > 0:
				raise ValueError()
		except ValueError:
			print(("error: --chunk-size %r is not a valid size specifier" % (options.chunk_size,)))
			return 1

		this.ConfigureLogging(log_level, options.syslog)

		try:
			src = OpenDisk(options.src)
			dest = OpenDisk(options.dest, create=True)
		except (IOError, OSError, SQLAlchemyError) as err:
			logging.error(f"Cannot open filesystem: {err}")
			return 1

		try:
			report = asyncio.run(copy_from_src_to_dest(src, dest, options.src_scope, options.dest_scope, block_size=chunk_size))
		except CopyError as err:
			logging.error(f"Copy failed: {err}")
			return 1

		for upath, reason in report.skipped:
			logging.warning(f"Skipped {upath}: {reason}")
		print(report)
		return 0


def main(args=None):
	sys.exit(DISKDRIVE().main(args))
