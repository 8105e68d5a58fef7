"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .errors import ConfigError

if TYPE_CHECKING:  # pragma: no cover
    from .models.pay_cycle import PayCycle

load_dotenv()

PAY_PERIOD_FALLBACKS = ("monthly_anchor", "strict")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FlowFund"
    LOG_FILENAME = "flowfund.log"

    def __init__(self) -> None:
        self.DATA_DIR = Path(os.getenv("FLOWFUND_DATA_DIR", "instance")).expanduser()
        self.DEV_MODE = _env_bool("FLOWFUND_DEV_MODE", default=True)
        self.LOG_LEVEL = os.getenv("FLOWFUND_LOG_LEVEL", "INFO").strip().upper()
        self.DEFAULT_CURRENCY = os.getenv("FLOWFUND_DEFAULT_CURRENCY", "USD").strip().upper()
        self.DEFAULT_PAY_DAY = _env_int("FLOWFUND_DEFAULT_PAY_DAY", 28)
        self.PAY_PERIOD_FALLBACK = (
            os.getenv("FLOWFUND_PAY_PERIOD_FALLBACK", "monthly_anchor").strip().lower()
        )
        self.validate()

    def validate(self) -> None:
        """Reject values the services cannot work with."""

        if not 1 <= self.DEFAULT_PAY_DAY <= 31:
            raise ConfigError(
                f"FLOWFUND_DEFAULT_PAY_DAY must be between 1 and 31, got {self.DEFAULT_PAY_DAY}"
            )
        if self.PAY_PERIOD_FALLBACK not in PAY_PERIOD_FALLBACKS:
            raise ConfigError(
                "FLOWFUND_PAY_PERIOD_FALLBACK must be one of "
                f"{', '.join(PAY_PERIOD_FALLBACKS)}, got {self.PAY_PERIOD_FALLBACK!r}"
            )
        if len(self.DEFAULT_CURRENCY) != 3 or not self.DEFAULT_CURRENCY.isalpha():
            raise ConfigError(
                f"FLOWFUND_DEFAULT_CURRENCY must be a 3-letter code, got {self.DEFAULT_CURRENCY!r}"
            )

    def resolve_log_dir(self) -> Path:
        """Return the directory log files are written to, creating it if needed."""

        path = Path(self.DATA_DIR) / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def default_pay_cycle(self) -> "PayCycle":
        """Pay cycle used when persisted state carries none."""

        from .models.pay_cycle import PayCycle

        return PayCycle(day_of_month=self.DEFAULT_PAY_DAY)


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; ignores ambient env overrides."""

    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.DATA_DIR = Path(data_dir) if data_dir is not None else Path("instance")
        self.DEV_MODE = True
        self.LOG_LEVEL = "DEBUG"
        self.DEFAULT_CURRENCY = "USD"
        self.DEFAULT_PAY_DAY = 28
        self.PAY_PERIOD_FALLBACK = "monthly_anchor"
        self.validate()
