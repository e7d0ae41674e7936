import re
import logging

# Default amount of data moved per read / write.
BLOCK_SIZE = 131072

# Copy everything readable from *reader* into *writer*, one block at a time.
# Both must be Handles. Any failure aborts the transfer and leaves the bytes already written in place.
# RETURNS the number of bytes written.
async def CopyStream(reader, writer, blockSize=BLOCK_SIZE):
	written = 0
	while True:
		block = await reader.Read(blockSize)
		if not block:
			break
		written += await writer.Write(block)

	await writer.Flush()
	logging.debug(f"Copied {written} bytes from {reader.upath} to {writer.upath}")
	return written


# Sizes are a count of bytes with an optional decimal (k, MB) or binary (KiB) multiplier, e.g. "128KiB".
# Raises ValueError for anything else.
def parse_size(size_str):
	multipliers = {
		't': 1000**4,
		'g': 1000**3,
		'm': 1000**2,
		'k': 1000**1,
		'tb': 1000**4,
		'gb': 1000**3,
		'mb': 1000**2,
		'kb': 1000**1,
		'tib': 1024**4,
		'gib': 1024**3,
		'mib': 1024**2,
		'kib': 1024**1,
	}
	size_re = re.compile(r'^\s*(\d+)\s*(%s)?\s*$' % ("|".join(list(multipliers.keys())),), 
						 re.I)

	m = size_re.match(size_str)
	if not m:
		raise ValueError("not a valid size specifier")

	size = int(m.group(1))
	multiplier = m.group(2)
	if multiplier is not None:
		try:
			size *= multipliers[multiplier.lower()]
		except KeyError:
			raise ValueError("invalid size multiplier")

	return size
