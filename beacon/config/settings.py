"""Application configuration settings."""

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv

from beacon.protocol.constants import (
    DEFAULT_MESSAGE, DEFAULT_PATTERN, DEFAULT_PERIOD_S, DEFAULT_TIMEOUT_S
)
from beacon.protocol.errors import PatternError

load_dotenv()

# REG_ICASE|REG_NEWLINE 相当
PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE


@dataclass
class Config:
    """アプリケーション設定（ログ表示のみ。プロトコル動作には影響しない）"""
    LOG_LEVEL: str = os.environ.get("BEACON_LOG_LEVEL", "WARNING")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT: str = os.environ.get("BEACON_LOG_FORMAT", "%(levelname)s - %(message)s")


@dataclass(frozen=True)
class BroadcastConfig:
    """送信側の設定"""
    interface_name: str
    period_seconds: int = DEFAULT_PERIOD_S
    message: bytes = DEFAULT_MESSAGE
    verbose: bool = False

    def __post_init__(self):
        if self.period_seconds < 0:
            raise ValueError(f"Invalid period {self.period_seconds}: must not be negative")
        # 0秒は1秒として扱う
        if self.period_seconds == 0:
            object.__setattr__(self, "period_seconds", 1)


@dataclass(frozen=True)
class ListenConfig:
    """受信側の設定"""
    timeout_seconds: int = DEFAULT_TIMEOUT_S
    pattern: re.Pattern = re.compile(DEFAULT_PATTERN, PATTERN_FLAGS)
    verbose: bool = False

    def __post_init__(self):
        if self.timeout_seconds < 0:
            raise ValueError(f"Invalid timeout {self.timeout_seconds}: must not be negative")

    @property
    def single_shot(self) -> bool:
        """タイムアウト指定時は最初の一致で終了、0なら永久に受信し続ける"""
        return self.timeout_seconds != 0

    @classmethod
    def from_text(cls, timeout_seconds: int = DEFAULT_TIMEOUT_S,
                  pattern_text: str = DEFAULT_PATTERN, verbose: bool = False) -> "ListenConfig":
        try:
            pattern = re.compile(pattern_text, PATTERN_FLAGS)
        except re.error as e:
            raise PatternError(f"Invalid regex '{pattern_text}': {e}") from e
        return cls(timeout_seconds=timeout_seconds, pattern=pattern, verbose=verbose)


# Global configuration instance
config = Config()
