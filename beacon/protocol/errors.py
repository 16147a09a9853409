"""Exceptions raised by the beacon protocol."""


class BeaconError(Exception):
    """致命的エラーの基底クラス（プロセスは終了コード1で終了する）"""
    pass


class MessageTooLongError(BeaconError, ValueError):
    """メッセージが1フレームに収まらない"""
    pass


class InterfaceError(BeaconError):
    """インターフェース名が不正、または存在しない"""
    pass


class PatternError(BeaconError, ValueError):
    """受信パターンの正規表現がコンパイルできない"""
    pass


class ShortFrameError(BeaconError):
    """最小フレームサイズ未満の受信（ソケットの誤用を示す）"""
    pass


class TransportError(BeaconError):
    """ソケットの作成・送信・受信の失敗"""
    pass


class MalformedFrameError(ValueError):
    """不正フレーム（正常な処理の一部として扱われ、破棄される）"""

    def __init__(self, declared_length: int, received: int):
        super().__init__(
            f"Declared length {declared_length} exceeds available payload "
            f"({received} bytes received)"
        )
        self.declared_length = declared_length
        self.received = received
