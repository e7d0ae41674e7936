import logging

from libdiskdrive.Utils import parse_size

def parse_log_level(log_level):
	try:
		return {'error': logging.ERROR,
				'warning': logging.WARNING,
				'info': logging.INFO,
				'debug': logging.DEBUG}[log_level.lower()]
	except KeyError:
		raise ValueError("invalid log level specifier")
