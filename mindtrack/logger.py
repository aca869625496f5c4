"""
MindTrack 日志配置。

- <data_dir>/logs/mindtrack.log: 目标操作记录 (创建 / 打卡 / 解锁 / 删除)
- <data_dir>/logs/corrupt_goals.log: 读不出来的目标文档，附原始内容片段
- stderr: 仅警告，--verbose 时包括操作记录
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from mindtrack.paths import get_data_dir

ROOT_LOGGER_NAME = "mindtrack"
CORRUPTION_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.corruption"

MAX_BYTES = 1024 * 1024
BACKUP_COUNT = 2
RAW_SNIPPET_CHARS = 200

FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def setup_logging(logs_dir: Optional[Path] = None, verbose: bool = False) -> Path:
    """
    Attach file and console handlers; safe to call once per CLI run.

    Returns:
        The directory the log files are written to.
    """
    target_dir = logs_dir or get_data_dir() / "logs"
    target_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    _reset(logger)

    activity = RotatingFileHandler(
        target_dir / "mindtrack.log",
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    activity.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(activity)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    # 损坏记录单独成文件，同时照常冒泡到 mindtrack.log
    corruption = logging.getLogger(CORRUPTION_LOGGER_NAME)
    _reset(corruption)
    dump = logging.FileHandler(target_dir / "corrupt_goals.log", encoding="utf-8")
    dump.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    corruption.addHandler(dump)

    return target_dir


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """mindtrack.<name>, e.g. get_logger("store")."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)


def log_corrupt_document(path: Path, error_msg: str) -> None:
    """Record a goal document that could not be loaded, with a snippet of its raw text."""
    try:
        raw = path.read_text(encoding="utf-8", errors="replace")[:RAW_SNIPPET_CHARS]
    except OSError as e:
        raw = f"<unreadable: {e}>"

    logging.getLogger(CORRUPTION_LOGGER_NAME).warning(
        "Skipping goal document %s: %s\n  Raw: %r", path.name, error_msg, raw
    )
