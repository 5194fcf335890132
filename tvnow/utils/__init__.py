"""
TVNow ユーティリティモジュール

共通機能やヘルパー関数を提供するユーティリティパッケージ
"""

from typing import List
from .base import LoggerMixin
from .datetime_utils import (
    get_timezone, to_zone, parse_listing_time, local_midnight, local_day_window, broadcast_date
)
from .network_utils import create_epg_session
from .config_utils import ConfigManager, DEFAULT_CONFIG, load_json_config

__all__: List[str] = [
    'LoggerMixin',
    'get_timezone',
    'to_zone',
    'parse_listing_time',
    'local_midnight',
    'local_day_window',
    'broadcast_date',
    'create_epg_session',
    'ConfigManager',
    'DEFAULT_CONFIG',
    'load_json_config',
]
