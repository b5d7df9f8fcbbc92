"""
Configuration Manager for Goal Tracker.

集中管理进度引擎的常量，所有经验值都在这里声明，
可由 config/runtime.yaml 覆盖。

使用方式:
    from tracker.config_manager import config
    window = config.DURATION_WINDOW_DAYS
"""
from dataclasses import dataclass
from pathlib import Path

import yaml

from tracker.logger import get_logger


CONFIG_DIR = Path(__file__).parent.parent / "config"
RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"

logger = get_logger("config")


@dataclass
class SystemConfig:
    """
    进度引擎运行时常量。
    """

    # === 时长图表 ===

    # 按天分桶的窗口长度，含今天
    DURATION_WINDOW_DAYS: int = 30

    # === 频次图表 ===

    # 回看窗口，与之相交的每一周 (周日起) 成为一个桶
    FREQUENCY_WINDOW_DAYS: int = 60

    # === 数值图表 ===

    # 最后一条记录之后追加的按周预测点数
    PROJECTION_WEEKS: int = 12

    # Y 轴上下留白占数值跨度的比例
    AXIS_PADDING_RATIO: float = 0.1

    # === 日历 ===

    # 打卡日历的表头，周日在前
    CALENDAR_WEEKDAYS: tuple = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _load_runtime_config(path: Path = RUNTIME_CONFIG_PATH) -> dict:
    """读取 runtime.yaml 覆盖项；文件不存在或无法解析时返回空字典。"""
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable runtime config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring runtime config %s: expected a mapping", path)
        return {}
    return data


def get_config(path: Path = RUNTIME_CONFIG_PATH) -> SystemConfig:
    """
    构建配置对象。

    优先级: runtime.yaml > 默认值
    """
    base = SystemConfig()
    overrides = _load_runtime_config(path)

    for key, value in overrides.items():
        if hasattr(base, key):
            setattr(base, key, value)
        else:
            logger.warning("Unknown config key in %s: %s", path, key)

    return base


config = get_config()
