"""
エラーハンドリングモジュール

このモジュールはTVNowの統一エラーハンドリングを提供します。
- カスタム例外クラス（処理を中断する致命的エラー）
- 番組表の正規化で発生する回復可能な警告
- エラーロギングと終了コードの決定
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from .logging_config import get_logger


class ErrorSeverity(Enum):
    """エラー重要度"""
    LOW = "low"           # 軽微な警告
    MEDIUM = "medium"     # 注意が必要なエラー
    HIGH = "high"         # 重要なエラー
    CRITICAL = "critical" # 致命的なエラー


class ErrorCategory(Enum):
    """エラーカテゴリ"""
    AREA = "area"                     # エリア指定関連
    NETWORK = "network"               # ネットワーク関連
    CONFIGURATION = "configuration"   # 設定関連
    UNKNOWN = "unknown"               # 不明


# カスタム例外クラス群

class TVNowError(Exception):
    """TVNow基底例外クラス"""
    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM, context: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}


class UnknownAreaError(TVNowError):
    """未対応エリアエラー（メッセージに利用可能なエリアを含む）"""
    def __init__(self, token: str, valid_areas: Sequence[str]):
        message = (f"{token} は対応エリアではありません。"
                   f"利用可能なエリア: {', '.join(valid_areas)}")
        super().__init__(message, ErrorCategory.AREA, ErrorSeverity.HIGH,
                         {'token': token})
        self.token = token
        self.valid_areas = tuple(valid_areas)


class FetchError(TVNowError):
    """番組表取得エラー"""
    def __init__(self, message: str, url: Optional[str] = None,
                 severity: ErrorSeverity = ErrorSeverity.HIGH):
        super().__init__(message, ErrorCategory.NETWORK, severity,
                         {'url': url} if url else None)
        self.url = url


class ConfigurationError(TVNowError):
    """設定エラー"""
    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.HIGH,
                 context: Dict[str, Any] = None):
        super().__init__(message, ErrorCategory.CONFIGURATION, severity, context)


# 回復可能な警告

class WarningKind(Enum):
    """番組表正規化時の警告種別"""
    MALFORMED_ENTRY = "malformed_entry"     # 不正な番組（破棄）
    OVERLAP_CONFLICT = "overlap_conflict"   # 同一チャンネル内の時間重複（後発を破棄）


@dataclass(frozen=True)
class ScheduleWarning:
    """番組表の処理を中断しない警告"""
    kind: WarningKind
    channel_id: str
    title: str
    message: str
    
    def __str__(self) -> str:
        return self.message


class ErrorHandler:
    """統一エラーハンドラー
    
    例外をカテゴリ・重要度に応じたレベルでログに記録し、
    プロセスの終了コードを返す。
    """
    
    EXIT_FAILURE = 1
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("tvnow.ErrorHandler")
        self.error_count_by_category: Dict[ErrorCategory, int] = {}
    
    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> int:
        """エラーを記録し、終了コードを返す"""
        if isinstance(error, TVNowError):
            category = error.category
            severity = error.severity
            if error.context:
                context = {**(context or {}), **error.context}
        else:
            category = ErrorCategory.UNKNOWN
            severity = ErrorSeverity.CRITICAL
        
        self.error_count_by_category[category] = self.error_count_by_category.get(category, 0) + 1
        
        self.logger.log(self._get_log_level(severity),
                        f"{category.value}: {error}",
                        exc_info=not isinstance(error, TVNowError))
        if context:
            self.logger.debug(f"Context: {context}")
        
        return self.EXIT_FAILURE
    
    def _get_log_level(self, severity: ErrorSeverity) -> int:
        """重要度からログレベルを決定"""
        return {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[severity]
