"""
日時処理ユーティリティ

番組表の時刻解析とタイムゾーン処理の統一機能
- 番組表の各種時刻表現をエリアのタイムゾーン付きdatetimeへ変換
- ローカル日付の0時を起点とした表示期間の計算
- 番組表の放送日（5時始まり）の計算
"""

from datetime import date, datetime, time, timedelta
from functools import lru_cache
from typing import Tuple, Union

import pytz


# 番組表の1日は5時から始まる（深夜番組は前日扱い）
BROADCAST_DAY_START_HOUR = 5

# 番組表で使われる時刻形式
TIME_FORMATS = (
    '%Y%m%d%H%M%S',      # 20240101050000
    '%Y%m%d%H%M',        # 202401010500
    '%Y-%m-%dT%H:%M:%S', # 2024-01-01T05:00:00
    '%Y-%m-%dT%H:%M',    # 2024-01-01T05:00
    '%Y-%m-%d %H:%M:%S', # 2024-01-01 05:00:00
    '%Y-%m-%d %H:%M',    # 2024-01-01 05:00
)

TimeValue = Union[str, int, float, datetime]


@lru_cache(maxsize=None)
def get_timezone(name: str) -> pytz.BaseTzInfo:
    """IANA名からタイムゾーンを取得（キャッシュ付き）"""
    return pytz.timezone(name)


def to_zone(value: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """datetimeを指定タイムゾーンのaware datetimeに変換
    
    naiveな値はそのタイムゾーンの現地時刻として扱う。
    """
    if value.tzinfo is None:
        return tz.localize(value)
    return tz.normalize(value.astimezone(tz))


def parse_listing_time(value: TimeValue, tz: pytz.BaseTzInfo) -> datetime:
    """番組表の時刻表現をタイムゾーン付きdatetimeに変換
    
    Args:
        value: 時刻文字列、UNIX時刻（秒）、またはdatetime
        tz: 変換先（naive値の解釈にも使う）タイムゾーン
        
    Returns:
        datetime: tzに正規化されたaware datetime
        
    Raises:
        ValueError: 解析できない値の場合
    """
    if isinstance(value, datetime):
        return to_zone(value, tz)
    
    if isinstance(value, bool):
        raise ValueError(f"時刻の解析に失敗しました: {value!r}")
    
    if isinstance(value, (int, float)):
        try:
            return tz.normalize(datetime.fromtimestamp(value, tz=pytz.utc).astimezone(tz))
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"時刻の解析に失敗しました: {value!r}") from None
    
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"時刻の解析に失敗しました: {value!r}")
    
    text = value.strip()
    for fmt in TIME_FORMATS:
        try:
            return tz.localize(datetime.strptime(text, fmt))
        except ValueError:
            continue
    
    # オフセット付きISO8601（2024-01-01T05:00:00+09:00, ...Z）
    try:
        parsed = datetime.fromisoformat(text[:-1] + '+00:00' if text.endswith('Z') else text)
    except ValueError:
        raise ValueError(f"時刻の解析に失敗しました: {value!r}") from None
    return to_zone(parsed, tz)


def local_midnight(instant: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """instantが属するtzでの暦日の0時を返す"""
    local_date = to_zone(instant, tz).date()
    return tz.localize(datetime.combine(local_date, time.min))


def local_day_window(instant: datetime, tz: pytz.BaseTzInfo, days: int = 1) -> Tuple[datetime, datetime]:
    """instantの暦日0時から days 日間の半開区間 [start, end) を返す
    
    終端も暦日の0時として個別にlocalizeするため、夏時間の切り替えを跨いでも
    日の境界がずれない。
    """
    start = local_midnight(instant, tz)
    end = tz.localize(datetime.combine(start.date() + timedelta(days=days), time.min))
    return start, end


def broadcast_date(instant: datetime, tz: pytz.BaseTzInfo,
                   start_hour: int = BROADCAST_DAY_START_HOUR) -> date:
    """番組表上の放送日を返す（start_hour時より前は前日扱い）"""
    local = to_zone(instant, tz)
    if local.hour < start_hour:
        local = local - timedelta(days=1)
    return local.date()
