import functools
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from logics.computation import PERCENT_TOLERANCE
from logics.data_model import DEFAULT_EXCHANGE_RATE, DEFAULT_TOTAL_TARGET, CalculationMode

load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "SALES_TARGET_"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("[CONFIG] %s%s=%r is not a number, using %s", ENV_PREFIX, name, raw, default)
        return default


def _env_mode(default: CalculationMode) -> CalculationMode:
    raw = os.getenv(ENV_PREFIX + "MODE")
    if not raw:
        return default
    try:
        return CalculationMode(raw.strip().lower())
    except ValueError:
        logger.warning("[CONFIG] Unknown mode %r, using %s", raw, default.value)
        return default


def _valid_log_level(raw: str) -> str:
    level = raw.strip().upper()
    # getLevelName maps known names to ints and echoes anything else back as "Level ..."
    if isinstance(logging.getLevelName(level), int):
        return level
    logger.warning("[CONFIG] Unknown log level %r, using INFO", raw)
    return "INFO"


class Settings:
    """Calculator start-up configuration loaded from environment variables."""

    def __init__(
        self,
        *,
        exchange_rate: Optional[float] = None,
        total_target: Optional[float] = None,
        mode: Optional[CalculationMode] = None,
        percent_tolerance: Optional[float] = None,
        toast_ms: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.exchange_rate = exchange_rate if exchange_rate is not None else _env_float("EXCHANGE_RATE", DEFAULT_EXCHANGE_RATE)
        self.total_target = total_target if total_target is not None else _env_float("TOTAL_TARGET", DEFAULT_TOTAL_TARGET)
        self.mode = mode or _env_mode(CalculationMode.TOP_DOWN)
        self.percent_tolerance = (
            percent_tolerance if percent_tolerance is not None else _env_float("PERCENT_TOLERANCE", PERCENT_TOLERANCE)
        )
        self.toast_ms = toast_ms if toast_ms is not None else int(_env_float("TOAST_MS", 3000))
        self.log_level = _valid_log_level(log_level or os.getenv(ENV_PREFIX + "LOG_LEVEL") or "INFO")


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
