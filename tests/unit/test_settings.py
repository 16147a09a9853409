import dataclasses
import re

import pytest

from beacon.config import BroadcastConfig, ListenConfig
from beacon.protocol import PatternError


class TestBroadcastConfig:
    """送信設定のテスト"""

    def test_defaults(self):
        broadcast_config = BroadcastConfig("eth0")

        assert broadcast_config.period_seconds == 1
        assert broadcast_config.message == b"beacon"
        assert broadcast_config.verbose is False

    def test_zero_period_is_one_second(self):
        assert BroadcastConfig("eth0", period_seconds=0) == BroadcastConfig("eth0", period_seconds=1)

    def test_negative_period_rejected(self):
        with pytest.raises(ValueError):
            BroadcastConfig("eth0", period_seconds=-1)

    def test_immutable(self):
        broadcast_config = BroadcastConfig("eth0")

        with pytest.raises(dataclasses.FrozenInstanceError):
            broadcast_config.period_seconds = 10


class TestListenConfig:
    """受信設定のテスト"""

    def test_defaults(self):
        listen_config = ListenConfig()

        assert listen_config.timeout_seconds == 4
        assert listen_config.pattern.pattern == ".*$"
        assert listen_config.single_shot is True

    def test_default_pattern_same_as_explicit(self):
        assert ListenConfig() == ListenConfig.from_text(4, ".*$")

    def test_pattern_is_case_insensitive(self):
        listen_config = ListenConfig.from_text(pattern_text="hello")

        assert listen_config.pattern.flags & re.IGNORECASE
        assert listen_config.pattern.search("HELLO there") is not None

    def test_invalid_pattern(self):
        with pytest.raises(PatternError, match=r"Invalid regex '\('"):
            ListenConfig.from_text(pattern_text="(")

    def test_zero_timeout_is_not_single_shot(self):
        assert ListenConfig.from_text(timeout_seconds=0).single_shot is False

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError):
            ListenConfig.from_text(timeout_seconds=-1)

    def test_alternation_takes_first_alternative(self):
        # Python re: 最初に一致した選択肢（POSIXの最長一致ではない）
        listen_config = ListenConfig.from_text(pattern_text="beac|beacon")

        assert listen_config.pattern.search("beacon").group(0) == "beac"
