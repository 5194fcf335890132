"""
TVNow - テレビ番組表表示ツール

このパッケージは指定エリアのテレビ番組表を取得し、現在放送中の番組・
今日の番組表・1週間の番組表を表示します。

主要コンポーネント:
- area_resolver: エリア名の解決
- schedule_fetcher: 番組表の取得
- schedule_normalizer: 番組表の正規化
- schedule_resolver: 表示モードごとの番組選択
- output_formatter: テキスト整形
- cli: コマンドライン操作
"""

__version__ = "1.0.0"
__license__ = "MIT"

# 主要クラスのインポート
from .area_resolver import AreaResolver, Area, AreaKind
from .program_info import Channel, RawListing, ProgramEntry, ProgramFlag
from .schedule_normalizer import ScheduleNormalizer, NormalizedSchedule
from .schedule_resolver import ScheduleResolver, ScheduleView, ChannelSchedule, AnnotatedEntry, ViewMode
from .schedule_fetcher import BangumiFetcher
from .output_formatter import OutputFormatter
from .error_handler import (
    ErrorHandler, TVNowError, UnknownAreaError, FetchError, ConfigurationError,
    ScheduleWarning, WarningKind, ErrorSeverity, ErrorCategory
)
from .cli import TVNowCLI

__all__ = [
    # エリア関連
    'AreaResolver',
    'Area',
    'AreaKind',
    
    # 番組情報関連
    'Channel',
    'RawListing',
    'ProgramEntry',
    'ProgramFlag',
    
    # 番組表処理
    'ScheduleNormalizer',
    'NormalizedSchedule',
    'ScheduleResolver',
    'ScheduleView',
    'ChannelSchedule',
    'AnnotatedEntry',
    'ViewMode',
    'BangumiFetcher',
    'OutputFormatter',
    
    # エラーハンドリング関連
    'ErrorHandler',
    'TVNowError',
    'UnknownAreaError',
    'FetchError',
    'ConfigurationError',
    'ScheduleWarning',
    'WarningKind',
    'ErrorSeverity',
    'ErrorCategory',
    
    # インターフェース関連
    'TVNowCLI',
]
