from pathlib import Path

from pytest import mark, raises

from kognit.errors import SecurityError
from kognit.file import build_real_sub_path, normalize_entry_name, resolve_entry_path


def test_build_real_sub_path():
    base = Path("/usr/kognit/work")
    assert build_real_sub_path(base, "dir/test.html").as_posix() == "/usr/kognit/work/dir/test.html"
    assert build_real_sub_path(base, Path("dir/test.html")).as_posix() == "/usr/kognit/work/dir/test.html"
    assert (
        build_real_sub_path(base, Path("dir/../../work/dir/test.html")).resolve()
        == Path("/usr/kognit/work/dir/test.html").resolve()
    )
    with raises(SecurityError):
        build_real_sub_path(base, "dir/../../test.html")
    with raises(SecurityError):
        build_real_sub_path(base, "/test.html")

    base = Path("./work")
    assert build_real_sub_path(base, "dir/test.html").as_posix() == "work/dir/test.html"
    with raises(SecurityError):
        build_real_sub_path(base, "dir/../../test.html")


@mark.parametrize(
    "name, expected",
    [
        ("file.txt", "file.txt"),
        ("dir/", "dir"),
        ("./dir/file.txt", "dir/file.txt"),
        ("dir/../file.txt", "file.txt"),
        ("dir\\sub\\file.txt", "dir/sub/file.txt"),
        ("./", "."),
    ],
)
def test_normalize_entry_name(name, expected):
    assert normalize_entry_name(name) == expected


@mark.parametrize(
    "name",
    ["", "../evil.txt", "dir/../../evil.txt", "..", "/etc/passwd", "\\evil.txt", "C:\\evil.txt", "C:evil.txt"],
)
def test_normalize_entry_name_rejects_escapes(name):
    with raises(SecurityError):
        normalize_entry_name(name)


def test_resolve_entry_path(path_work):
    assert resolve_entry_path(path_work, "dir/file.txt") == path_work / "dir/file.txt"
    assert resolve_entry_path(path_work, "./") == path_work
    with raises(SecurityError, match="evil.txt"):
        resolve_entry_path(path_work, "../evil.txt")


def test_resolve_entry_path_rejects_symlink_out_of_destination(path_work):
    destination = path_work / "dest"
    outside = path_work / "outside"
    destination.mkdir()
    outside.mkdir()
    (destination / "link").symlink_to(outside, target_is_directory=True)

    with raises(SecurityError):
        resolve_entry_path(destination, "link/evil.txt")
