"""
Ethernet Beacon Application

Command line entry point for the two roles:
- send: broadcast a beacon on one interface forever
- recv: wait for a beacon on any interface and print the matching text

Exit status: 0 on a match, 1 on timeout, argument errors or fatal errors.
"""

import argparse
import os
import sys
import threading
from typing import List, Optional

from beacon.config import BroadcastConfig, ListenConfig
from beacon.protocol import (
    DEFAULT_MESSAGE, DEFAULT_PATTERN, DEFAULT_PERIOD_S, DEFAULT_TIMEOUT_S,
    MAX_MESSAGE_LENGTH, BeaconError, Broadcaster, Listener, ListenOutcome
)
from beacon.utils import setup_logging

USAGE = f"""\
Usage:

    beacon send [-N] interface [message]

Send ethernet beacons on the specified interface, forever until killed.

Where:

    "-N" is the repeat rate in seconds, default {DEFAULT_PERIOD_S}.

    "message" is up to {MAX_MESSAGE_LENGTH} characters to be sent in the beacon payload. The
    default message is "{DEFAULT_MESSAGE.decode()}".

-or-

    beacon recv [-N] [regex]

Wait for an ethernet beacon on any interface, print the contained message and
exit 0, or exit 1 on timeout.

Where:

    -N is the number of seconds to wait, default {DEFAULT_TIMEOUT_S}. If 0 then never timeout,
    just print received beacons forever.

    "regex" is a regular expression to match in the beacon message. Non
    matching beacons are ignored.  Only the part of the message that matches
    the regex will be printed (case-insensitive). The default regex is "{DEFAULT_PATTERN}",
    i.e. match any beacon.

Add a leading -d to either command for debug output on stderr.
"""


class BeaconArgumentParser(argparse.ArgumentParser):
    """引数エラー時は使い方を表示して終了コード1で終了"""

    def error(self, message):
        sys.stderr.write(USAGE)
        self.exit(1, f"{self.prog}: error: {message}\n")


def non_negative_int(value: str) -> int:
    seconds = int(value)
    # select/sleep が扱えない値は引数エラー
    if seconds < 0 or seconds > threading.TIMEOUT_MAX:
        raise argparse.ArgumentTypeError(f"invalid seconds: {value}")
    return seconds


def normalize_argv(argv: List[str]) -> List[str]:
    """サブコマンド直後の "-N" を "--seconds N" に変換（数値でなければ引数エラーになる）"""
    argv = list(argv)
    for i, token in enumerate(argv):
        if token.startswith("-"):
            continue
        if i + 1 < len(argv) and argv[i + 1].startswith("-") and not argv[i + 1].startswith("--"):
            argv[i + 1:i + 2] = ["--seconds", argv[i + 1][1:]]
        break
    return argv


def build_parser() -> argparse.ArgumentParser:
    parser = BeaconArgumentParser(
        prog="beacon", usage=USAGE, add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-d", "--debug", action="store_true", help=argparse.SUPPRESS)
    subparsers = parser.add_subparsers(dest="command", prog="beacon", parser_class=BeaconArgumentParser)
    subparsers.required = True

    send = subparsers.add_parser("send", usage=USAGE, add_help=False)
    send.add_argument("--seconds", type=non_negative_int, default=DEFAULT_PERIOD_S, help=argparse.SUPPRESS)
    send.add_argument("interface")
    send.add_argument("message", nargs="?")
    send.set_defaults(handler=run_send)

    recv = subparsers.add_parser("recv", usage=USAGE, add_help=False)
    recv.add_argument("--seconds", type=non_negative_int, default=DEFAULT_TIMEOUT_S, help=argparse.SUPPRESS)
    recv.add_argument("pattern", nargs="?", default=DEFAULT_PATTERN)
    recv.set_defaults(handler=run_recv)

    return parser


def run_send(args) -> int:
    # 引数はOSのバイト列のまま送る
    message = os.fsencode(args.message) if args.message is not None else DEFAULT_MESSAGE
    broadcast_config = BroadcastConfig(
        interface_name=args.interface,
        period_seconds=args.seconds,
        message=message,
        verbose=args.debug
    )
    Broadcaster(broadcast_config).run()
    return 1  # run() never returns


def run_recv(args) -> int:
    listen_config = ListenConfig.from_text(
        timeout_seconds=args.seconds,
        pattern_text=args.pattern,
        verbose=args.debug
    )
    outcome = Listener(listen_config).run()
    return 0 if outcome is ListenOutcome.MATCHED else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(normalize_argv(argv))
    logger = setup_logging(args.debug)

    try:
        return args.handler(args)
    except BeaconError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Exiting due to KeyboardInterrupt.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
