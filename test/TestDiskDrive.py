import os
import errno
import logging

import eons
import pytest

from StandardTestFixture import StandardTestFixture

from libdiskdrive import (
	DiskDrive,
	CopyError,
	FileType,
	MemDisk,
	OsDisk,
	SqlDisk,
	copy_between,
	copy_from_src,
	copy_to_dest,
	copy_from_src_to_dest,
)
from libdiskdrive.fs.File import MemFileHandle


class TestDiskDrive(StandardTestFixture):

	# /a/b.txt (0644, 1000:1000) and /a/link -> b.txt
	def MakeSource(this, **kw):
		src = MemDisk(**kw)
		this.run(this.WriteFile(src, "/a/b.txt", b"hello world", mode=0o644, uid=1000, gid=1000))
		this.run(src.Symlink("b.txt", "/a/link"))
		return src

	def Describe(this, fs, upath):
		meta = this.run(fs.Metadata(upath))
		return (meta.fileType, meta.mode, meta.uid, meta.gid)

	def test_tree_to_empty_destination(this):
		src = this.MakeSource()
		dest = MemDisk()

		report = this.run(copy_between(src, dest))

		this.assert_equal(this.run(this.ReadFile(dest, "/a/b.txt")), b"hello world")
		this.assert_equal(this.Describe(dest, "/a/b.txt"), (FileType.FILE, 0o644, 1000, 1000))
		this.assert_equal(this.run(dest.ReadLink("/a/link")), "b.txt")
		this.assert_equal(this.run(this.ReadFile(dest, "/a/link")), b"hello world")

		this.assert_equal(report.files, ["/a/b.txt"])
		this.assert_equal(report.directories, ["/", "/a"])
		this.assert_equal(report.symlinks, ["/a/link"])
		this.assert_equal(report.skipped, [])

	def test_directory_metadata(this):
		src = this.MakeSource()
		this.run(src.SetPermissions("/a", 0o2750))
		this.run(src.Chown("/a", 33, 44))
		this.run(src.CreateDirAll("/a/empty"))
		this.run(src.SetPermissions("/a/empty", 0o700))
		dest = MemDisk(uid=9, gid=9)

		this.run(copy_between(src, dest))

		this.assert_equal(this.Describe(dest, "/"), (FileType.DIRECTORY, 0o755, 0, 0))
		this.assert_equal(this.Describe(dest, "/a"), (FileType.DIRECTORY, 0o2750, 33, 44))
		this.assert_equal(this.Describe(dest, "/a/empty"), (FileType.DIRECTORY, 0o700, 0, 0))

	def test_single_file(this):
		src = this.MakeSource()
		dest = MemDisk()

		report = this.run(copy_from_src(src, dest, "/a/b.txt"))

		this.assert_equal(this.run(this.ReadFile(dest, "/a/b.txt")), b"hello world")
		this.assert_equal(this.Describe(dest, "/a/b.txt"), (FileType.FILE, 0o644, 1000, 1000))
		this.assert_equal(this.run(dest.ReadDir("/a")), ["b.txt"])
		this.assert_equal(report.files, ["/a/b.txt"])

	def test_symlink_is_not_dereferenced(this):
		src = this.MakeSource()
		this.run(src.Symlink("/does/not/exist", "/dangling"))
		dest = MemDisk()

		this.run(copy_between(src, dest))

		this.assert_equal(this.run(dest.ReadLink("/dangling")), "/does/not/exist")
		assert not this.run(this.Exists(dest, "/does"))

	def test_symlink_scope(this):
		src = this.MakeSource()
		dest = MemDisk()

		report = this.run(copy_from_src(src, dest, "/a/link"))

		this.assert_equal(this.run(dest.ReadLink("/a/link")), "b.txt")
		this.assert_equal(report.symlinks, ["/a/link"])
		this.assert_equal(report.files, [])

	def test_symlink_parents_are_created(this):
		src = this.MakeSource()
		this.run(src.CreateDirAll("/deep/er"))
		this.run(src.Symlink("../../a", "/deep/er/up"))
		dest = MemDisk()

		this.run(copy_from_src(src, dest, "/deep/er/up"))

		this.assert_equal(this.run(dest.ReadLink("/deep/er/up")), "../../a")

	def test_symlink_collision_with_other_entry(this):
		src = this.MakeSource()
		dest = MemDisk()
		this.run(this.WriteFile(dest, "/a/link", b"in the way"))

		with pytest.raises(CopyError) as err:
			this.run(copy_between(src, dest))
		this.assert_equal(err.value.errno, errno.EEXIST)
		this.assert_equal(err.value.filename, "/a/link")

	def test_scopes_are_taken_literally(this):
		src = MemDisk()
		this.run(this.WriteFile(src, "/2024/{month}.txt", b"march"))
		dest = MemDisk()

		report = this.run(copy_from_src_to_dest(src, dest, "2024", "{out}"))

		this.assert_equal(this.run(this.ReadFile(dest, "/{out}/2024/{month}.txt")), b"march")
		this.assert_equal((report.srcScope, report.destScope), ("/2024", "/{out}"))

	def test_copy_twice_is_idempotent(this):
		src = this.MakeSource()
		dest = MemDisk()

		this.run(copy_between(src, dest))
		first = (this.run(this.ReadFile(dest, "/a/b.txt")), this.Describe(dest, "/a/b.txt"), this.run(dest.ReadLink("/a/link")))
		this.run(copy_between(src, dest))
		second = (this.run(this.ReadFile(dest, "/a/b.txt")), this.Describe(dest, "/a/b.txt"), this.run(dest.ReadLink("/a/link")))

		this.assert_equal(first, second)
		this.assert_equal(sorted(this.run(dest.ReadDir("/a"))), ["b.txt", "link"])

	def test_overwrite_existing_file(this):
		src = this.MakeSource()
		dest = MemDisk()
		this.run(this.WriteFile(dest, "/a/b.txt", b"a much longer piece of old content", mode=0o600, uid=7, gid=8))

		this.run(copy_between(src, dest))

		this.assert_equal(this.run(this.ReadFile(dest, "/a/b.txt")), b"hello world")
		this.assert_equal(this.Describe(dest, "/a/b.txt"), (FileType.FILE, 0o644, 1000, 1000))

	def test_unsupported_entry_is_skipped(this, caplog):
		src = this.MakeSource()
		src.Mknod("/a/sock", FileType.SOCKET)
		this.run(this.WriteFile(src, "/z.txt", b"after the socket"))
		dest = MemDisk()

		with caplog.at_level(logging.ERROR):
			report = this.run(copy_between(src, dest))

		this.assert_equal(this.run(this.ReadFile(dest, "/a/b.txt")), b"hello world")
		this.assert_equal(this.run(this.ReadFile(dest, "/z.txt")), b"after the socket")
		assert not this.run(this.Exists(dest, "/a/sock"))

		errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
		this.assert_equal(len(errors), 1)
		assert "/a/sock" in errors[0].getMessage()
		this.assert_equal([upath for upath, reason in report.skipped], ["/a/sock"])

	def test_destination_scope(this):
		src = this.MakeSource()
		dest = MemDisk()

		this.run(copy_to_dest(src, dest, "backup"))

		this.assert_equal(this.run(this.ReadFile(dest, "/backup/a/b.txt")), b"hello world")
		this.assert_equal(this.run(dest.ReadLink("/backup/a/link")), "b.txt")
		assert not this.run(this.Exists(dest, "/a"))

	def test_source_and_destination_scope(this):
		src = this.MakeSource()
		this.run(this.WriteFile(src, "/other.txt", b"not copied"))
		dest = MemDisk()

		report = this.run(copy_from_src_to_dest(src, dest, "/a", "/out"))

		this.assert_equal(this.run(this.ReadFile(dest, "/out/a/b.txt")), b"hello world")
		this.assert_equal(this.run(dest.ReadDir("/")), ["out"])
		this.assert_equal(report.srcScope, "/a")
		this.assert_equal(report.destScope, "/out")

	def test_missing_source_scope(this):
		src = this.MakeSource()
		dest = MemDisk()

		with pytest.raises(CopyError) as err:
			this.run(copy_from_src(src, dest, "/missing"))
		this.assert_equal(err.value.errno, errno.ENOENT)
		this.assert_equal(err.value.filename, "/missing")
		assert isinstance(err.value.__cause__, FileNotFoundError)
		this.assert_equal(this.run(dest.ReadDir("/")), [])

	def test_ownership_failure_aborts(this):
		class NoChownDisk(MemDisk):
			async def Chown(this, upath, uid, gid):
				raise IOError(errno.EPERM, "operation not permitted", upath)

		src = this.MakeSource()
		dest = NoChownDisk()

		with pytest.raises(CopyError) as err:
			this.run(copy_from_src(src, dest, "/a/b.txt"))
		this.assert_equal(err.value.errno, errno.EPERM)
		this.assert_equal(err.value.filename, "/a/b.txt")

		# No rollback.
		this.assert_equal(this.run(this.ReadFile(dest, "/a/b.txt")), b"hello world")

	def test_transfer_failure_aborts(this):
		class FullHandle(MemFileHandle):
			async def Write(this, data):
				raise IOError(errno.ENOSPC, "no space left on device", this.upath)

		class FullDisk(MemDisk):
			async def Open(this, upath, options):
				handle = await super().Open(upath, options)
				if options.IsWriteable():
					return FullHandle(handle.upath, handle.inode, options)
				return handle

		src = this.MakeSource()
		this.run(this.WriteFile(src, "/z.txt", b"never reached"))
		dest = FullDisk()

		with pytest.raises(CopyError) as err:
			this.run(copy_between(src, dest))
		this.assert_equal(err.value.errno, errno.ENOSPC)
		this.assert_equal(err.value.filename, "/a/b.txt")
		assert not this.run(this.Exists(dest, "/z.txt"))

	def test_small_blocks(this):
		src = MemDisk()
		data = bytes(range(256)) * 40
		this.run(this.WriteFile(src, "/blob", data))
		dest = MemDisk()

		this.run(DiskDrive()(src, dest, block_size=7))

		this.assert_equal(this.run(this.ReadFile(dest, "/blob")), data)

	def test_block_size_specifier(this):
		src = this.MakeSource()
		dest = MemDisk()
		drive = DiskDrive()

		report = this.run(drive(src, dest, block_size="1KiB"))

		this.assert_equal(drive.block_size, 1024)
		this.assert_equal(report.files, ["/a/b.txt"])

	def test_invalid_arguments(this):
		with pytest.raises(TypeError):
			DiskDrive()("/src", MemDisk())
		with pytest.raises(eons.MissingArgumentError):
			DiskDrive()(MemDisk(), MemDisk(), block_size=0)
		with pytest.raises(eons.MissingArgumentError):
			DiskDrive()(MemDisk(), MemDisk(), block_size="lots")
		with pytest.raises(eons.MissingArgumentError):
			DiskDrive()(MemDisk())

	def test_walk_failure_names_nested_directory(this):
		class LockedDisk(MemDisk):
			async def ReadDir(this, upath):
				if upath == "/a/locked":
					raise IOError(errno.EACCES, "permission denied", upath)
				return await super().ReadDir(upath)

		src = LockedDisk()
		this.run(this.WriteFile(src, "/a/locked/secret.txt", b"hidden"))
		dest = MemDisk()

		with pytest.raises(CopyError) as err:
			this.run(copy_from_src(src, dest, "/a"))
		this.assert_equal(err.value.errno, errno.EACCES)
		this.assert_equal(err.value.filename, "/a/locked")
		assert isinstance(err.value.__cause__, PermissionError)
		this.assert_equal(this.run(dest.ReadDir("/")), [])


class TestDiskDriveAcrossBackends(StandardTestFixture):

	def test_memory_to_sql(this):
		src = MemDisk()
		this.run(this.WriteFile(src, "/etc/conf", b"key=value", mode=0o640, uid=0, gid=42))
		this.run(src.Symlink("conf", "/etc/conf.link"))
		dest = SqlDisk()

		this.run(copy_between(src, dest))

		this.assert_equal(this.run(this.ReadFile(dest, "/etc/conf")), b"key=value")
		meta = this.run(dest.Metadata("/etc/conf"))
		this.assert_equal((meta.mode, meta.uid, meta.gid), (0o640, 0, 42))
		this.assert_equal(this.run(dest.ReadLink("/etc/conf.link")), "conf")

	def test_sql_to_memory(this):
		src = SqlDisk()
		this.run(this.WriteFile(src, "/x/y.bin", b"\x00\x01\x02", mode=0o4755, uid=1, gid=2))
		dest = MemDisk()

		this.run(copy_from_src(src, dest, "/x"))

		this.assert_equal(this.run(this.ReadFile(dest, "/x/y.bin")), b"\x00\x01\x02")
		meta = this.run(dest.Metadata("/x/y.bin"))
		this.assert_equal((meta.mode, meta.uid, meta.gid), (0o4755, 1, 2))

	def test_os_to_os(this):
		srcRoot = this.NewDir()
		destRoot = this.NewDir()
		os.makedirs(os.path.join(srcRoot, "a", "sub"))
		with open(os.path.join(srcRoot, "a", "b.txt"), 'wb') as file:
			file.write(b"on disk")
		os.chmod(os.path.join(srcRoot, "a", "b.txt"), 0o640)
		os.chmod(os.path.join(srcRoot, "a", "sub"), 0o750)
		os.symlink("b.txt", os.path.join(srcRoot, "a", "link"))

		this.run(copy_between(OsDisk(srcRoot), OsDisk(destRoot)))

		copied = os.path.join(destRoot, "a", "b.txt")
		with open(copied, 'rb') as file:
			this.assert_equal(file.read(), b"on disk")
		this.assert_equal(os.stat(copied).st_mode & 0o7777, 0o640)
		this.assert_equal(os.stat(os.path.join(destRoot, "a", "sub")).st_mode & 0o7777, 0o750)
		this.assert_equal(os.readlink(os.path.join(destRoot, "a", "link")), "b.txt")

	def test_memory_to_os_file_into_directory(this):
		src = MemDisk(uid=os.getuid(), gid=os.getgid())
		this.run(this.WriteFile(src, "/report.txt", b"quarterly"))
		destRoot = this.NewDir()
		os.makedirs(os.path.join(destRoot, "report.txt"))

		this.run(copy_from_src(src, OsDisk(destRoot), "/report.txt"))

		with open(os.path.join(destRoot, "report.txt", "report.txt"), 'rb') as file:
			this.assert_equal(file.read(), b"quarterly")
