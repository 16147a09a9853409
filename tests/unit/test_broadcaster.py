import logging
import socket
from unittest.mock import MagicMock

import pytest

from beacon.config import BroadcastConfig
from beacon.protocol import (Broadcaster, BroadcasterState, InterfaceError,
                             MessageTooLongError, TransportError)


class StopBroadcast(Exception):
    pass


def stop_after(count):
    """count回目のsleepでループを止めるsleep関数"""
    calls = []

    def sleep(seconds):
        calls.append(seconds)
        if len(calls) >= count:
            raise StopBroadcast()

    sleep.calls = calls
    return sleep


@pytest.fixture
def known_interface(monkeypatch):
    monkeypatch.setattr(socket, "if_nametoindex", lambda name: 3)


class TestBroadcaster:
    """ブロードキャスト送信のテスト"""

    def test_sends_encoded_payload_to_broadcast_address(self, known_interface):
        sock = MagicMock()
        sleep = stop_after(3)
        broadcaster = Broadcaster(BroadcastConfig("eth0"), socket_factory=lambda: sock, sleep=sleep)

        with pytest.raises(StopBroadcast):
            broadcaster.run()

        assert sock.sendto.call_count == 3
        payload, address = sock.sendto.call_args.args
        assert payload == b"\xbe\xaa" + b"beacon"
        assert address == ("eth0", 0xBEAC, 0, 0, b"\xff\xff\xff\xff\xff\xff")
        assert broadcaster.state is BroadcasterState.BROADCASTING
        assert broadcaster.sent_count == 3

    def test_zero_period_sleeps_one_second(self, known_interface):
        sleep = stop_after(2)
        broadcaster = Broadcaster(BroadcastConfig("eth0", period_seconds=0),
                                  socket_factory=MagicMock, sleep=sleep)

        with pytest.raises(StopBroadcast):
            broadcaster.run()

        assert sleep.calls == [1, 1]

    def test_configured_period(self, known_interface):
        sleep = stop_after(1)
        broadcaster = Broadcaster(BroadcastConfig("eth0", period_seconds=5),
                                  socket_factory=MagicMock, sleep=sleep)

        with pytest.raises(StopBroadcast):
            broadcaster.run()

        assert sleep.calls == [5]

    def test_message_too_long_fails_before_socket(self):
        socket_factory = MagicMock()

        with pytest.raises(MessageTooLongError):
            Broadcaster(BroadcastConfig("eth0", message=b"x" * 1499), socket_factory=socket_factory)

        socket_factory.assert_not_called()

    def test_max_length_message(self, known_interface):
        sock = MagicMock()
        broadcaster = Broadcaster(BroadcastConfig("eth0", message=b"x" * 1498),
                                  socket_factory=lambda: sock, sleep=stop_after(1))

        with pytest.raises(StopBroadcast):
            broadcaster.run()

        payload, _ = sock.sendto.call_args.args
        assert len(payload) == 1500

    def test_invalid_interface_closes_socket(self):
        sock = MagicMock()
        broadcaster = Broadcaster(BroadcastConfig(""), socket_factory=lambda: sock)

        with pytest.raises(InterfaceError):
            broadcaster.run()

        sock.close.assert_called_once()
        assert broadcaster.state is BroadcasterState.INIT

    def test_bind(self, known_interface):
        broadcaster = Broadcaster(BroadcastConfig("eth0"), socket_factory=MagicMock)

        broadcaster.bind()

        assert broadcaster.state is BroadcasterState.BOUND
        assert broadcaster.destination.ifindex == 3

    def test_transmit_failure_is_fatal(self, known_interface):
        sock = MagicMock()
        sock.sendto.side_effect = OSError(100, "Network is down")
        sleep = MagicMock()
        broadcaster = Broadcaster(BroadcastConfig("eth0"), socket_factory=lambda: sock, sleep=sleep)

        with pytest.raises(TransportError, match="sendto failed: Network is down"):
            broadcaster.run()

        sleep.assert_not_called()


class TestDebugLogging:

    def test_interface_logged_when_verbose(self, known_interface, caplog):
        broadcaster = Broadcaster(BroadcastConfig("eth0", verbose=True), socket_factory=MagicMock)

        with caplog.at_level(logging.DEBUG, logger="beacon"):
            broadcaster.bind()

        assert "Interface eth0 resolved to index 3" in caplog.text

    def test_interface_silent_by_default(self, known_interface, caplog):
        broadcaster = Broadcaster(BroadcastConfig("eth0"), socket_factory=MagicMock)

        with caplog.at_level(logging.DEBUG, logger="beacon"):
            broadcaster.bind()

        assert "resolved to index" not in caplog.text
