"""
ネットワーク処理ユーティリティ

番組表取得用のHTTPセッション作成の統一機能
"""

from typing import Dict, Optional

import requests

from tvnow import __version__


def create_epg_session(
    timeout: int = 30,
    additional_headers: Optional[Dict[str, str]] = None
) -> requests.Session:
    """番組表サイト用の標準セッションを作成
    
    Args:
        timeout: リクエストタイムアウト秒数（デフォルト: 30秒）
        additional_headers: 追加ヘッダー辞書
        
    Returns:
        requests.Session: 設定済みセッション
        
    Note:
        requests.Session は timeout 属性を参照しないため、
        呼び出し側は session.timeout を各リクエストに明示的に渡すこと。
    """
    session = requests.Session()
    session.timeout = timeout
    
    standard_headers = {
        'User-Agent': f'tvnow/{__version__}',
        'Accept': 'text/html,application/xhtml+xml',
        'Accept-Language': 'ja,en;q=0.9',
        'Connection': 'keep-alive'
    }
    
    if additional_headers:
        standard_headers.update(additional_headers)
    
    session.headers.update(standard_headers)
    return session
