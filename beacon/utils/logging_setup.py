"""Logging configuration setup."""

import logging
import sys

from beacon.config.settings import config


def setup_logging(debug: bool = False):
    """ログ設定のセットアップ"""
    # -d 指定時は DEBUG、それ以外は settings.py のログレベル
    if debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format=config.LOG_FORMAT,
        stream=sys.stderr,
        force=True
    )
    return logging.getLogger("beacon")
