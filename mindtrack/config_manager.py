"""
Configuration Manager for MindTrack.

集中管理进度引擎的常量和阈值。所有经验值必须显式声明并可配置。

使用方式:
    from mindtrack.config_manager import config
    window = config.ADJUSTMENT_WINDOW
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from mindtrack.exceptions import ConfigError
from mindtrack.paths import PROJECT_ROOT

CONFIG_DIR = PROJECT_ROOT / "config"
RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"


@dataclass
class SystemConfig:
    """
    Progress engine constants.

    Defaults reproduce the production formulas; runtime.yaml may override
    any of them by name.
    """

    # === Daily policy ===

    # Lower bound on expected days, so a brand-new goal cannot hit 100%
    # after one log.
    MIN_EXPECTED_DAYS: int = 7

    # Trailing window (days) for the consistency bonus
    CONSISTENCY_WINDOW_DAYS: int = 7

    # Logs required inside the window before the bonus applies
    CONSISTENCY_MIN_LOGS: int = 3

    # Bonus points at 100% recent consistency
    CONSISTENCY_BONUS_MAX: int = 10

    # === Deadline policy ===

    DEADLINE_COMPLETION_WEIGHT: float = 0.6
    DEADLINE_TIME_WEIGHT: float = 0.4

    # === Adjustment advisor ===

    # Most recent N logs inspected
    ADJUSTMENT_WINDOW: int = 14

    # Loosen when at least LOOSEN_MIN_LOGS logs and rate below LOOSEN_RATE
    LOOSEN_MIN_LOGS: int = 7
    LOOSEN_RATE: float = 0.3

    # Tighten when at least TIGHTEN_MIN_LOGS logs and rate above TIGHTEN_RATE
    TIGHTEN_MIN_LOGS: int = 14
    TIGHTEN_RATE: float = 0.9

    # === Feedback ===

    # AI feedback entries kept per goal (oldest dropped first)
    MAX_FEEDBACK_ITEMS: int = 50

    # Mood at or below this triggers struggle suggestions
    LOW_MOOD_THRESHOLD: int = 4

    # Mood at or above this earns a positive-mood remark
    HIGH_MOOD_THRESHOLD: int = 8

    # === Insights ===

    # Logs considered for "recent progress"
    RECENT_PROGRESS_WINDOW: int = 7


def _load_runtime_config(path: Path) -> dict:
    """加载运行时配置覆盖（如果存在）。"""
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Cannot read runtime config: {e}", config_path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Runtime config must be a mapping", config_path=str(path))
    return data


def get_config(path: Optional[Path] = None) -> SystemConfig:
    """
    获取系统配置实例。

    优先级：runtime.yaml > 默认值。Unknown keys are ignored.
    """
    base = SystemConfig()
    overrides = _load_runtime_config(path or RUNTIME_CONFIG_PATH)
    known = {f.name for f in fields(SystemConfig)}

    for key, value in overrides.items():
        if key in known:
            setattr(base, key, value)

    return base


# 全局配置实例（单例模式）
config = get_config()
