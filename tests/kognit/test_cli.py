import logging

from pytest import raises

from kognit.__main__ import amain, get_args


def test_get_args():
    args = get_args(["decode", "data.zip", "-d", "out"])
    assert args.command == "decode"
    assert str(args.path) == "data.zip"
    assert str(args.destination) == "out"
    assert args.format is None

    with raises(SystemExit):
        get_args(["encode", "data", "--format", "rar"])


async def test_cli_encode_decode(path_work, source_tree, snapshot, monkeypatch):
    monkeypatch.delenv("KOGNIT_DEFAULT_FORMAT", raising=False)

    assert await amain(["encode", str(source_tree), "--format", "tar.gz"]) == 0
    assert await amain(["encode", str(source_tree)]) == 0

    assert (path_work / "data.tar.gz").is_file()
    assert (path_work / "data.zip").is_file()

    assert await amain(["decode", str(path_work / "data.tar.gz"), "-d", str(path_work / "restored")]) == 0
    assert snapshot(path_work / "restored") == snapshot(source_tree)


async def test_cli_decode_defaults_to_archive_directory(path_work, source_tree, snapshot):
    archive_dir = path_work / "archives"
    archive_dir.mkdir()
    assert await amain(["encode", str(source_tree), "-f", "zip"]) == 0
    (path_work / "data.zip").rename(archive_dir / "data.zip")

    assert await amain(["decode", str(archive_dir / "data.zip")]) == 0

    assert snapshot(archive_dir) == {"data.zip": (archive_dir / "data.zip").read_bytes()} | snapshot(source_tree)


async def test_cli_reports_errors(path_work):
    assert await amain(["encode", str(path_work / "missing")]) == 1
    assert await amain(["decode", str(path_work / "missing.zip")]) == 1

    file = path_work / "file.txt"
    file.write_text("Hello world!")
    assert await amain(["compress", str(file), "-a", "lzw"]) == 1
    assert await amain(["compress", str(file), "-a", "unknown"]) == 1


async def test_cli_logs_config_at_debug_level(path_work, source_tree, monkeypatch, caplog):
    monkeypatch.setenv("KOGNIT_LOG_LEVEL", "DEBUG")
    caplog.set_level(logging.DEBUG, logger="kognit")

    assert await amain(["encode", str(source_tree), "-f", "zip"]) == 0

    assert "App config: " in caplog.text
    assert "'log_level': 'DEBUG'" in caplog.text
