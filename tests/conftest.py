from pathlib import Path
from random import Random
from typing import Callable, Optional

from pytest import fixture

TESTS_ROOT_PATH = Path(__file__).parent

Snapshot = dict[str, Optional[bytes]]


@fixture
def path_work(tmp_path):
    """This is the path to the working directory. Change this to the following code, to review the results in a directory:

    Example:
        path = TESTS_ROOT_PATH / "work"
        if path.exists() and path.is_dir():
            shutil.rmtree(path)
        path.mkdir()
        return path
    """
    return tmp_path


@fixture
def source_tree(path_work) -> Path:
    """Create a small directory tree with nested, empty and zero-byte entries."""
    root = path_work / "data"
    (root / "sub/nested").mkdir(parents=True)
    (root / "empty_dir").mkdir()
    (root / "hello.txt").write_text("Hello world! hello.txt")
    (root / "empty.txt").touch()
    (root / "random.bin").write_bytes(Random(42).randbytes(300_000))
    (root / "sub/nested/deep.txt").write_text("Hello world! sub/nested/deep.txt")
    script = root / "sub/script.sh"
    script.write_text("#!/bin/sh\necho hello\n")
    script.chmod(0o750)
    return root


@fixture
def snapshot() -> Callable[[Path], Snapshot]:
    """Return a function mapping every path below a root to its content (None for directories)."""

    def _snapshot(root: Path) -> Snapshot:
        return {
            path.relative_to(root).as_posix(): (None if path.is_dir() else path.read_bytes())
            for path in sorted(root.rglob("*"))
        }

    return _snapshot
