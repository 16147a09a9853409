"""Link-layer (AF_PACKET) socket helpers. Linux only."""

import os
import select
import socket
from dataclasses import dataclass
from typing import Optional

from .constants import BROADCAST_ADDRESS, ETHERTYPE_BEACON, IFNAMSIZ
from .errors import InterfaceError, TransportError


@dataclass(frozen=True)
class BroadcastDestination:
    """ブロードキャスト宛先（sockaddr_ll 相当）"""
    interface_name: str
    ifindex: int
    ethertype: int = ETHERTYPE_BEACON
    address: bytes = BROADCAST_ADDRESS

    def as_sockaddr(self) -> tuple:
        # (ifname, proto, pkttype, hatype, addr)。proto はホストバイトオーダーで渡す
        return (self.interface_name, self.ethertype, 0, 0, self.address)


def validate_interface_name(interface_name: str) -> None:
    """インターフェース名の検証（空、または IFNAMSIZ 以上は不正）"""
    if not interface_name or len(os.fsencode(interface_name)) >= IFNAMSIZ:
        raise InterfaceError("Interface name is invalid")


def resolve_interface(interface_name: str) -> int:
    """インターフェース名からインデックスを取得"""
    validate_interface_name(interface_name)
    try:
        ifindex = socket.if_nametoindex(interface_name)
    except OSError as e:
        raise InterfaceError(f"SIOCGIFINDEX on {interface_name} failed: {e.strerror or e}") from e
    return ifindex


def broadcast_destination(interface_name: str) -> BroadcastDestination:
    return BroadcastDestination(interface_name=interface_name, ifindex=resolve_interface(interface_name))


def open_send_socket() -> socket.socket:
    """送信用ソケット（プロトコル0: 受信はしない）"""
    try:
        return socket.socket(socket.AF_PACKET, socket.SOCK_DGRAM, 0)
    except OSError as e:
        raise TransportError(f"socket failed: {e.strerror or e}") from e


def open_receive_socket(ethertype: int = ETHERTYPE_BEACON) -> socket.socket:
    """全インターフェースで指定イーサタイプを受信するソケット"""
    try:
        return socket.socket(socket.AF_PACKET, socket.SOCK_DGRAM, socket.htons(ethertype))
    except OSError as e:
        raise TransportError(f"socket failed: {e.strerror or e}") from e


def wait_readable(sock, timeout: Optional[float]) -> bool:
    """
    ソケットが読み込み可能になるまで待機

    Args:
        sock: 待機対象のソケット
        timeout: 最大待機秒数。None の場合は無期限

    Returns:
        読み込み可能ならTrue、タイムアウトならFalse
    """
    try:
        readable, _, _ = select.select([sock], [], [], timeout)
    except (OSError, OverflowError) as e:
        raise TransportError(f"select failed: {getattr(e, 'strerror', None) or e}") from e
    return bool(readable)
