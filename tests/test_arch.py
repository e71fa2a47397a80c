import os
import stat

import pytest

from lzhkit import arch
from lzhkit.arch import FileType


@pytest.fixture
def some_file(tmp_path):
    path = tmp_path / "file.bin"
    path.write_bytes(b"contents")
    return path


def test_exists_reports_missing(tmp_path):
    assert arch.exists(str(tmp_path / "missing")) is FileType.NONE


def test_exists_reports_file(some_file):
    assert arch.exists(str(some_file)) is FileType.FILE


def test_exists_reports_directory(tmp_path):
    assert arch.exists(str(tmp_path)) is FileType.DIRECTORY


def test_exists_reports_error_below_regular_file(some_file):
    assert arch.exists(str(some_file / "child")) is FileType.ERROR


def test_mkdir_creates_directory(tmp_path):
    target = tmp_path / "newdir"
    arch.mkdir(str(target), 0o755)
    assert arch.exists(str(target)) is FileType.DIRECTORY


def test_mkdir_existing_raises(tmp_path):
    target = tmp_path / "dir"
    arch.mkdir(str(target), 0o755)
    with pytest.raises(FileExistsError):
        arch.mkdir(str(target), 0o755)


def test_chmod_sets_permissions(some_file):
    arch.chmod(str(some_file), 0o640)
    assert stat.S_IMODE(os.stat(some_file).st_mode) == 0o640


def test_chmod_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        arch.chmod(str(tmp_path / "missing"), 0o644)


def test_chown_to_current_owner(some_file):
    uid, gid = os.getuid(), os.getgid()
    arch.chown(str(some_file), uid, gid)
    info = os.stat(some_file)
    assert (info.st_uid, info.st_gid) == (uid, gid)


def test_chown_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        arch.chown(str(tmp_path / "missing"), os.getuid(), os.getgid())


def test_utime_sets_both_times(some_file):
    arch.utime(str(some_file), 1000000000)
    info = os.stat(some_file)
    assert info.st_mtime == 1000000000
    assert info.st_atime == 1000000000


def test_windows_timestamps_at_unix_epoch(some_file):
    epoch = 116444736000000000
    arch.set_windows_timestamps(str(some_file), epoch, epoch, epoch)
    info = os.stat(some_file)
    assert info.st_mtime_ns == 0
    assert info.st_atime_ns == 0


def test_windows_timestamps_keep_access_and_modification_apart(some_file):
    base = arch.FILETIME_UNIX_EPOCH
    second = 10_000_000
    modification = base + 2000 * second
    access = base + 3000 * second
    arch.set_windows_timestamps(str(some_file), base, modification, access)
    info = os.stat(some_file)
    assert info.st_mtime == 2000
    assert info.st_atime == 3000


def test_open_new_file_writes_data(tmp_path):
    target = tmp_path / "out.bin"
    with arch.open_new_file(str(target)) as handle:
        handle.write(b"\x00\x01hello")
    assert target.read_bytes() == b"\x00\x01hello"


def test_open_new_file_replaces_existing(some_file):
    with arch.open_new_file(str(some_file)) as handle:
        handle.write(b"new")
    assert some_file.read_bytes() == b"new"


def test_open_new_file_default_is_owner_only(tmp_path):
    target = tmp_path / "private.bin"
    with arch.open_new_file(str(target)):
        pass
    assert stat.S_IMODE(os.stat(target).st_mode) & 0o077 == 0


def test_open_new_file_applies_permissions(tmp_path):
    target = tmp_path / "perms.bin"
    uid, gid = os.getuid(), os.getgid()
    with arch.open_new_file(str(target), uid, gid, 0o640):
        pass
    info = os.stat(target)
    assert stat.S_IMODE(info.st_mode) == 0o640
    assert info.st_uid == uid


def test_open_new_file_does_not_follow_symlink(tmp_path):
    victim = tmp_path / "victim.txt"
    victim.write_bytes(b"keep me")
    link = tmp_path / "link"
    os.symlink(victim, link)

    with arch.open_new_file(str(link)) as handle:
        handle.write(b"overwritten")

    assert victim.read_bytes() == b"keep me"
    assert not os.path.islink(link)
    assert link.read_bytes() == b"overwritten"


def test_open_new_file_in_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        arch.open_new_file(str(tmp_path / "nodir" / "file.bin"))


def test_symlink_creates_link(tmp_path):
    link = tmp_path / "link"
    arch.symlink(str(link), "some/target")
    assert os.readlink(link) == "some/target"


def test_symlink_replaces_existing_file(some_file):
    arch.symlink(str(some_file), "elsewhere")
    assert os.path.islink(some_file)
    assert os.readlink(some_file) == "elsewhere"


def test_symlink_to_directory_is_seen_as_directory(tmp_path):
    subdir = tmp_path / "sub"
    subdir.mkdir()
    link = tmp_path / "dirlink"
    arch.symlink(str(link), str(subdir))
    assert arch.exists(str(link)) is FileType.DIRECTORY


def test_dangling_symlink_reports_missing(tmp_path):
    link = tmp_path / "dangling"
    arch.symlink(str(link), str(tmp_path / "nowhere"))
    assert arch.exists(str(link)) is FileType.NONE