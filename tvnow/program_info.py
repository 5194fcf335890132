"""
番組情報データモジュール

このモジュールは番組表処理で共有するデータクラスを定義します。
- チャンネル情報
- 取得直後の生の番組データ（RawListing）
- 正規化済みの番組データ（ProgramEntry）
- 番組フラグ（無料放送・字幕など）
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import FrozenSet, Iterable, Tuple

from .utils.datetime_utils import TimeValue


class ProgramFlag:
    """番組フラグ"""
    FREE = "free"             # 無料放送
    SUBTITLED = "subtitled"   # 字幕放送
    RERUN = "rerun"           # 再放送
    NEW = "new"               # 新番組
    FINAL = "final"           # 最終回
    LIVE = "live"             # 生放送
    
    # 表示用マーカー（表示順）
    MARKERS: Tuple[Tuple[str, str], ...] = (
        (FREE, "[無]"),
        (NEW, "[新]"),
        (FINAL, "[終]"),
        (LIVE, "[生]"),
        (RERUN, "[再]"),
        (SUBTITLED, "[字]"),
    )
    
    # 番組名中の記号 -> フラグ
    TITLE_MARKERS: Tuple[Tuple[str, str], ...] = (
        ("[無]", FREE),
        ("[無料]", FREE),
        ("【無料】", FREE),
        ("[字]", SUBTITLED),
        ("[再]", RERUN),
        ("[新]", NEW),
        ("[終]", FINAL),
        ("[生]", LIVE),
    )
    
    @classmethod
    def from_title(cls, title: str) -> FrozenSet[str]:
        """番組名に含まれる記号からフラグを抽出"""
        return frozenset(flag for marker, flag in cls.TITLE_MARKERS if marker in title)
    
    @classmethod
    def split_title(cls, title: str) -> Tuple[str, FrozenSet[str]]:
        """番組名から記号を取り除き、(番組名, フラグ) を返す"""
        flags = cls.from_title(title)
        for marker, _ in cls.TITLE_MARKERS:
            title = title.replace(marker, "")
        return " ".join(title.split()), flags
    
    @classmethod
    def markers_for(cls, flags: Iterable[str]) -> Tuple[str, ...]:
        """フラグを表示用マーカーに変換"""
        flags = set(flags)
        return tuple(marker for flag, marker in cls.MARKERS if flag in flags)


@dataclass(frozen=True)
class Channel:
    """チャンネル情報"""
    id: str
    name: str


@dataclass(frozen=True)
class RawListing:
    """番組表から取得した未正規化の番組データ
    
    start / end は時刻文字列・UNIX時刻・datetime のいずれでもよい。
    """
    channel_id: str
    channel_name: str
    start: TimeValue
    end: TimeValue
    title: str
    flags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ProgramEntry:
    """正規化済みの番組データ（start < end、エリアのタイムゾーン付き）"""
    channel: Channel
    start: datetime
    end: datetime
    title: str
    flags: FrozenSet[str] = field(default_factory=frozenset)
    
    @property
    def duration(self) -> timedelta:
        """番組時間"""
        return self.end - self.start
    
    @property
    def duration_minutes(self) -> int:
        """番組時間（分）"""
        return int(self.duration.total_seconds() / 60)
    
    @property
    def is_free(self) -> bool:
        """無料放送かどうか"""
        return ProgramFlag.FREE in self.flags
    
    def contains(self, instant: datetime) -> bool:
        """instantが放送時間内（start <= instant < end）かどうか"""
        return self.start <= instant < self.end
    
    def overlaps(self, window_start: datetime, window_end: datetime) -> bool:
        """半開区間 [window_start, window_end) と重なるかどうか"""
        return self.start < window_end and self.end > window_start
