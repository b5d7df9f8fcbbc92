"""
Goal Tracker 日志系统

日志分三路:
- logs/system.log: 日常运行记录 (INFO+)，store 的增删改都在这里
- logs/error.log: 读写失败等错误 (ERROR+)
- 控制台: 只输出用户需要看到的 (WARNING+)

集合文件里读到坏记录时，另外追加到 logs/corruption_dump.log，
方便手工修复 data/*.json。
"""
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

LOGS_DIR = Path(__file__).parent.parent / "logs"
CORRUPTION_LOG_NAME = "corruption_dump.log"

MAX_BYTES = 5 * 1024 * 1024  # 5MB
BACKUP_COUNT = 3

ROOT_LOGGER_NAME = "goal_tracker"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: int = logging.INFO,
    console_level: int = logging.WARNING,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    初始化 goal_tracker 日志树。main.py 和 CLI 启动时各调用一次。

    Args:
        log_level: system.log 的级别 (默认 INFO)
        console_level: 控制台级别 (默认 WARNING)
        logs_dir: 日志目录，测试里指向 tmp_path

    Returns:
        根 logger "goal_tracker"
    """
    target_dir = logs_dir or LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    # 重复调用 (uvicorn reload、测试) 时不叠加 handler
    root.handlers.clear()

    file_formatter = logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root.addHandler(_rotating_handler(target_dir / "system.log", log_level, file_formatter))
    root.addHandler(_rotating_handler(target_dir / "error.log", logging.ERROR, file_formatter))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    获取模块 logger，如 get_logger("store") -> goal_tracker.store
    """
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)


def log_corruption(collection_path: Path, index: int, raw_record: Any, error_msg: str) -> Path:
    """
    把集合文件里无法解析的记录追加到 corruption_dump.log。

    Args:
        collection_path: 出问题的 json 文件
        index: 记录在集合数组里的下标
        raw_record: 原始记录内容
        error_msg: 解析错误

    Returns:
        dump 文件路径
    """
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    dump_path = LOGS_DIR / CORRUPTION_LOG_NAME

    with open(dump_path, "a", encoding="utf-8") as f:
        f.write(f"[{datetime.now().isoformat()}] {collection_path.name} #{index}: {error_msg}\n")
        f.write(f"  Raw: {raw_record!r}\n")

    get_logger("store").warning("坏记录 %s #%d: %s", collection_path.name, index, error_msg)
    return dump_path
