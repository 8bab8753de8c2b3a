import pytest

from rediskit.lib import logger
from rediskit.lib.logger import LogLevel, Settings


@pytest.fixture(autouse=True)
def _restore_level():
    yield
    logger.set_level(LogLevel.ERROR)


def test_default_level_drops_info(capsys):
    logger.info("hidden %s", "message")
    logger.error("shown %s", "message")
    out = capsys.readouterr().out
    assert "hidden message" not in out
    assert "shown message" in out
    assert "[ERROR]" in out


def test_debug_level_writes_everything(capsys):
    logger.set_level(LogLevel.DEBUG)
    logger.debug("d")
    logger.info("i %d", 5)
    logger.warn("w")
    out = capsys.readouterr().out
    assert "[DEBUG]" in out
    assert "[INFO]" in out and "i 5" in out
    assert "[WARN]" in out


def test_prefix_names_caller(capsys):
    logger.error("where")
    out = capsys.readouterr().out
    assert "test_logger.py:" in out
    assert out.endswith("where\n")


def test_fatal_ignores_level(capsys):
    logger.set_level(LogLevel.FATAL)
    logger.error("dropped")
    logger.fatal("kept")
    out = capsys.readouterr().out
    assert "dropped" not in out
    assert "[FATAL]" in out and "kept" in out


def test_message_without_formatting_args(capsys):
    logger.error(ValueError("boom"))
    assert "boom" in capsys.readouterr().out


def test_setup_writes_to_file(tmp_path, capsys):
    log_dir = tmp_path / "logs"
    logger.setup(Settings(path=str(log_dir), name="srv", ext="log"))
    logger.error("to file %s", "ok")
    files = list(log_dir.glob("srv-*.log"))
    assert len(files) == 1
    assert "to file ok" in files[0].read_text(encoding="utf-8")
    assert "to file ok" in capsys.readouterr().out


def test_setup_fails_when_directory_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(OSError):
        logger.setup(Settings(path=str(blocker), name="srv", ext="log"))