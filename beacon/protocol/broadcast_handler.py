"""Periodic beacon broadcaster."""

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from .errors import TransportError
from .frame_parser import FrameParser
from .link_socket import BroadcastDestination, broadcast_destination, open_send_socket

if TYPE_CHECKING:
    from beacon.config.settings import BroadcastConfig

logger = logging.getLogger(__name__)


class BroadcasterState(Enum):
    INIT = "init"
    BOUND = "bound"
    BROADCASTING = "broadcasting"


class Broadcaster:
    """指定インターフェースへビーコンを一定間隔でブロードキャストする"""

    def __init__(self, broadcast_config: "BroadcastConfig",
                 socket_factory: Callable = open_send_socket,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = broadcast_config
        self.socket_factory = socket_factory
        self.sleep = sleep

        # ペイロードはソケット作成前に生成する（長すぎるメッセージはI/O前にエラー）
        self.frame = FrameParser.encode(broadcast_config.message)
        self.payload = self.frame.to_bytes()

        self.sock = None
        self.destination: Optional[BroadcastDestination] = None
        self.sent_count = 0
        self.state = BroadcasterState.INIT

    def bind(self) -> None:
        """INIT -> BOUND"""
        sock = self.socket_factory()
        try:
            self.destination = broadcast_destination(self.config.interface_name)
        except Exception:
            sock.close()
            raise
        self.sock = sock
        self.state = BroadcasterState.BOUND
        if self.config.verbose:
            logger.debug(f"Interface {self.destination.interface_name} resolved to index {self.destination.ifindex}")
        logger.info(
            f"Bound to {self.destination.interface_name} (index {self.destination.ifindex}), "
            f"ethertype 0x{self.destination.ethertype:04X}"
        )

    def transmit(self) -> None:
        """1フレーム送信。失敗は致命的（リトライしない）"""
        try:
            self.sock.sendto(self.payload, self.destination.as_sockaddr())
        except OSError as e:
            raise TransportError(f"sendto failed: {e.strerror or e}") from e
        self.sent_count += 1
        if self.config.verbose:
            logger.debug(f"Sent beacon #{self.sent_count} ({self.frame.wire_size} bytes)")

    def run(self) -> None:
        """送信ループ。プロセスが終了されるまで戻らない"""
        if self.state is BroadcasterState.INIT:
            self.bind()
        self.state = BroadcasterState.BROADCASTING
        logger.info(f"Broadcasting every {self.config.period_seconds}s on {self.config.interface_name}")

        while True:
            self.transmit()
            self.sleep(self.config.period_seconds)
