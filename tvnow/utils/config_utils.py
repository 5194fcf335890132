"""
設定ファイル管理ユーティリティ

JSON設定ファイルの読み込み・検証機能を提供します。
設定ファイルは任意で、存在しない場合はデフォルト設定を使用します。
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union

from tvnow.error_handler import ConfigurationError
from tvnow.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".tvnow" / "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "default_area": "tokyo",
    "request_timeout": 30,
    "max_workers": 8,
    "color": "auto",        # "auto" / true / false
    "log_level": "WARNING",
    "log_file": "",         # 空文字はファイル出力なし
}


class ConfigManager:
    """統一設定管理クラス
    
    Usage:
        config_manager = ConfigManager("config.json")
        config = config_manager.load_config(DEFAULT_CONFIG)
        config_manager.validate_config(config)
    """
    
    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH, encoding: str = 'utf-8'):
        """初期化
        
        Args:
            config_path: 設定ファイルパス
            encoding: ファイルエンコーディング（デフォルト: utf-8）
        """
        self.config_path = Path(config_path).expanduser()
        self.encoding = encoding
    
    def load_config(self, default_config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """設定ファイルを読み込み
        
        Args:
            default_config: デフォルト設定辞書
            
        Returns:
            設定辞書（ファイルが存在しない・壊れている場合はデフォルト設定）
        """
        if default_config is None:
            default_config = DEFAULT_CONFIG
        
        merged_config = default_config.copy()
        
        if not self.config_path.exists():
            logger.debug(f"設定ファイルが存在しません: {self.config_path} - デフォルト設定を使用します")
            return merged_config
        
        try:
            with open(self.config_path, 'r', encoding=self.encoding) as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"設定ファイルJSON解析エラー: {self.config_path} - {e}")
            return merged_config
        except OSError as e:
            logger.error(f"設定ファイル読み込みエラー: {self.config_path} - {e}")
            return merged_config
        
        if not isinstance(config, dict):
            logger.error(f"設定データが辞書型ではありません: {self.config_path}")
            return merged_config
        
        merged_config.update(config)
        logger.debug(f"設定ファイル読み込み成功: {self.config_path}")
        return merged_config
    
    def validate_config(self, config: Dict[str, Any], required_keys: Optional[list] = None) -> bool:
        """設定データの検証
        
        Args:
            config: 検証する設定辞書
            required_keys: 必須キーのリスト（省略時はデフォルト設定の全キー）
            
        Returns:
            検証成功ならTrue
            
        Raises:
            ConfigurationError: 値が不正な場合
        """
        if required_keys is None:
            required_keys = list(DEFAULT_CONFIG)
        
        missing_keys = [key for key in required_keys if key not in config]
        if missing_keys:
            raise ConfigurationError(f"必須キーが不足しています: {missing_keys}")
        
        timeout = config.get("request_timeout")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"request_timeout は正の数である必要があります: {timeout!r}")
        
        workers = config.get("max_workers")
        if isinstance(workers, bool) or not isinstance(workers, int) or workers <= 0:
            raise ConfigurationError(f"max_workers は正の整数である必要があります: {workers!r}")
        
        if config.get("color") not in ("auto", True, False):
            raise ConfigurationError(f"color は \"auto\" / true / false のいずれかです: {config.get('color')!r}")
        
        if not isinstance(config.get("default_area"), str):
            raise ConfigurationError("default_area は文字列である必要があります")
        
        logger.debug("設定データ検証成功")
        return True


def load_json_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
                     default_config: Optional[Dict[str, Any]] = None,
                     encoding: str = 'utf-8') -> Dict[str, Any]:
    """JSON設定ファイルを読み込み、検証して返す（関数版）"""
    config_manager = ConfigManager(config_path, encoding)
    config = config_manager.load_config(default_config)
    config_manager.validate_config(config)
    return config
