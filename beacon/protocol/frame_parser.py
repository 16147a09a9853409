"""Frame encoding and decoding utilities."""

from dataclasses import dataclass

from .constants import LENGTH_FIELD_BYTES, LENGTH_XOR_MASK, MAX_MESSAGE_LENGTH, MIN_FRAME_PAYLOAD
from .errors import MalformedFrameError, MessageTooLongError, ShortFrameError


@dataclass(frozen=True)
class BeaconFrame:
    """ビーコンフレーム"""
    length_tag: int
    message: bytes

    @property
    def wire_size(self) -> int:
        return LENGTH_FIELD_BYTES + len(self.message)

    def to_bytes(self) -> bytes:
        return self.length_tag.to_bytes(LENGTH_FIELD_BYTES, byteorder="big") + self.message

    def text(self) -> str:
        """メッセージをC文字列として解釈（最初のNULで打ち切り）"""
        message = self.message.split(b"\x00", 1)[0]
        return message.decode("utf-8", errors="replace")


class FrameParser:
    """フレーム解析クラス"""

    @staticmethod
    def encode(message: bytes) -> BeaconFrame:
        """メッセージからフレームを作成"""
        if len(message) > MAX_MESSAGE_LENGTH:
            raise MessageTooLongError(
                f"Message is too long: {len(message)} bytes, maximum {MAX_MESSAGE_LENGTH}"
            )
        return BeaconFrame(length_tag=len(message) ^ LENGTH_XOR_MASK, message=bytes(message))

    @staticmethod
    def decode(raw: bytes) -> BeaconFrame:
        """
        受信ペイロードからフレームを復元

        Args:
            raw: リンク層から受信したペイロード（パディングを含む）

        Returns:
            復元したフレーム（パディングは含まない）

        Raises:
            ShortFrameError: 最小フレームサイズ未満
            MalformedFrameError: 宣言長が受信バイト数を超える
        """
        if len(raw) < MIN_FRAME_PAYLOAD:
            raise ShortFrameError(
                f"Received {len(raw)} bytes, link-layer minimum is {MIN_FRAME_PAYLOAD}"
            )

        length_tag = int.from_bytes(raw[:LENGTH_FIELD_BYTES], byteorder="big")
        declared_length = length_tag ^ LENGTH_XOR_MASK
        if declared_length > len(raw) - LENGTH_FIELD_BYTES:
            raise MalformedFrameError(declared_length, len(raw))

        message = bytes(raw[LENGTH_FIELD_BYTES:LENGTH_FIELD_BYTES + declared_length])
        return BeaconFrame(length_tag=length_tag, message=message)
