"""
radiko-guide ユーティリティモジュール

共通機能やヘルパー関数を提供するユーティリティパッケージ
"""

from typing import List
from .base import LoggerMixin
from .config_utils import ConfigManager
from .datetime_utils import JST, format_radiko_time, parse_radiko_time
from .network_utils import RadikoTransport, create_radiko_session

__all__: List[str] = [
    'LoggerMixin',
    'ConfigManager',
    'JST',
    'format_radiko_time',
    'parse_radiko_time',
    'RadikoTransport',
    'create_radiko_session',
]
