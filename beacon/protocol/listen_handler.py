"""Beacon listener with pattern filtering and timeout handling."""

import logging
import sys
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, TextIO

from .constants import MAX_PAYLOAD_LENGTH, MIN_FRAME_PAYLOAD
from .errors import MalformedFrameError, ShortFrameError, TransportError
from .frame_parser import FrameParser
from .link_socket import open_receive_socket, wait_readable

if TYPE_CHECKING:
    from beacon.config.settings import ListenConfig

logger = logging.getLogger(__name__)


class ListenerState(Enum):
    INIT = "init"
    BOUND = "bound"
    WAITING = "waiting"
    MATCHED = "matched"
    IGNORED = "ignored"
    DONE = "done"
    TIMED_OUT = "timed_out"


class ListenOutcome(Enum):
    MATCHED = "matched"
    TIMED_OUT = "timed_out"


class Listener:
    """
    全インターフェースでビーコンを受信し、パターンに一致した部分を出力する

    timeout_seconds > 0 の場合は最初の一致で終了（締め切りは待機開始時点から固定）。
    timeout_seconds == 0 の場合は無期限に受信し、一致するたびに出力し続ける。
    """

    def __init__(self, listen_config: "ListenConfig", sock=None,
                 wait: Callable = wait_readable,
                 clock: Callable[[], float] = time.monotonic,
                 output: Optional[TextIO] = None):
        self.config = listen_config
        self.sock = sock
        self.wait = wait
        self.clock = clock
        self.output = output
        self.match_count = 0
        self.state = ListenerState.INIT

    def bind(self) -> None:
        """INIT -> BOUND"""
        if self.sock is None:
            self.sock = open_receive_socket()
        self.state = ListenerState.BOUND

    def receive(self) -> bytes:
        """1フレーム受信（最小フレームサイズ未満は致命的）"""
        try:
            raw = self.sock.recv(MAX_PAYLOAD_LENGTH)
        except OSError as e:
            raise TransportError(f"recvfrom failed: {e.strerror or e}") from e
        if len(raw) < MIN_FRAME_PAYLOAD:
            raise ShortFrameError(f"recvfrom failed: short read of {len(raw)} bytes")
        return raw

    def handle_frame(self, raw: bytes) -> Optional[str]:
        """フレームを解析し、一致した部分文字列を返す（不一致・不正フレームはNone）"""
        try:
            frame = FrameParser.decode(raw)
        except MalformedFrameError as e:
            self.state = ListenerState.IGNORED
            if self.config.verbose:
                logger.debug(f"Ignoring invalid payload bytes={e.declared_length} got={e.received}")
            return None

        text = frame.text()
        match = self.config.pattern.search(text)
        if match is None:
            self.state = ListenerState.IGNORED
            if self.config.verbose:
                logger.debug(f"Ignoring unexpected message '{text}'")
            return None

        self.state = ListenerState.MATCHED
        return match.group(0)

    def emit(self, matched: str) -> None:
        output = self.output or sys.stdout
        output.write(f"{matched}\n")
        output.flush()
        self.match_count += 1

    def run(self) -> ListenOutcome:
        """
        受信ループ

        Returns:
            単発モードでは MATCHED または TIMED_OUT。無期限モードでは戻らない
        """
        if self.state is ListenerState.INIT:
            self.bind()
        if self.config.verbose:
            logger.debug(f"Waiting for '{self.config.pattern.pattern}'")

        deadline = self.clock() + self.config.timeout_seconds if self.config.single_shot else None

        while True:
            self.state = ListenerState.WAITING

            if deadline is not None:
                remaining = deadline - self.clock()
                if remaining <= 0:
                    self.state = ListenerState.TIMED_OUT
                    if self.config.verbose:
                        logger.debug(f"No matching beacon within {self.config.timeout_seconds}s")
                    return ListenOutcome.TIMED_OUT
                if not self.wait(self.sock, remaining):
                    # 締め切り到達の判定はループ先頭で行う
                    continue

            matched = self.handle_frame(self.receive())
            if matched is None:
                continue

            self.emit(matched)
            if self.config.single_shot:
                self.state = ListenerState.DONE
                return ListenOutcome.MATCHED
