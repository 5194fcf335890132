"""
番組表解決モジュール

正規化済み番組表から表示モードに応じた番組を選び出します。
- NOW: 基準時刻に放送中の番組（チャンネルごとに最大1件）
- TODAY: 基準時刻の暦日（エリアの現地時刻0時から1日間）に重なる番組
- WEEK: 基準時刻の暦日0時から7日間に重なる番組

入出力のみに依存する純粋な処理で、通信やファイル操作は行いません。
"""

from bisect import bisect_right
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .area_resolver import Area
from .error_handler import ScheduleWarning
from .program_info import Channel, ProgramEntry, ProgramFlag
from .schedule_normalizer import NormalizedSchedule
from .utils.base import LoggerMixin
from .utils.datetime_utils import get_timezone, local_day_window, to_zone


class ViewMode(Enum):
    """表示モード"""
    NOW = "now"
    TODAY = "today"
    WEEK = "week"
    
    @property
    def window_days(self) -> int:
        return {ViewMode.TODAY: 1, ViewMode.WEEK: 7}.get(self, 0)


@dataclass(frozen=True)
class AnnotatedEntry:
    """表示用の注釈付き番組"""
    entry: ProgramEntry
    free_to_view: bool
    markers: Tuple[str, ...] = ()
    
    @property
    def title(self) -> str:
        return self.entry.title
    
    @property
    def start(self) -> datetime:
        return self.entry.start
    
    @property
    def end(self) -> datetime:
        return self.entry.end


@dataclass(frozen=True)
class ChannelSchedule:
    """チャンネルごとの解決結果"""
    channel: Channel
    entries: Tuple[AnnotatedEntry, ...]
    
    @property
    def is_off_air(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class ScheduleView:
    """表示モードごとに解決された番組表"""
    area: Area
    mode: ViewMode
    reference: datetime
    rows: Tuple[ChannelSchedule, ...]
    warnings: Tuple[ScheduleWarning, ...] = ()
    
    def __iter__(self):
        return iter((row.channel, row.entries) for row in self.rows)
    
    def entries_for(self, channel_id: str) -> Tuple[AnnotatedEntry, ...]:
        for row in self.rows:
            if row.channel.id == channel_id:
                return row.entries
        return ()


def annotate(entry: ProgramEntry) -> AnnotatedEntry:
    """番組フラグのみから表示用の注釈を付ける"""
    return AnnotatedEntry(
        entry=entry,
        free_to_view=entry.is_free,
        markers=ProgramFlag.markers_for(entry.flags),
    )


class ScheduleResolver(LoggerMixin):
    """番組表解決クラス"""
    
    def resolve(self, schedule: NormalizedSchedule, mode: ViewMode, reference: datetime,
                channel_order: Optional[Sequence[str]] = None) -> ScheduleView:
        """表示モードに応じて番組を選択
        
        Args:
            schedule: 正規化済み番組表
            mode: 表示モード
            reference: 基準時刻（naiveな場合はエリアの現地時刻として扱う）
            channel_order: チャンネルIDの表示順（含まれないチャンネルは後ろに番組表の順で続く）
            
        Returns:
            ScheduleView: チャンネル順・時刻順の解決結果
        """
        tz = get_timezone(schedule.area.timezone)
        reference = to_zone(reference, tz)
        
        if mode is ViewMode.NOW:
            select = lambda entries: self._select_now(entries, reference)
        else:
            window_start, window_end = local_day_window(reference, tz, mode.window_days)
            self.logger.debug(f"表示期間: {window_start.isoformat()} - {window_end.isoformat()}")
            select = lambda entries: self._select_window(entries, window_start, window_end)
        
        rows = tuple(
            ChannelSchedule(channel, tuple(annotate(entry) for entry in select(schedule.entries_for(channel))))
            for channel in self._order_channels(schedule.channels, channel_order)
        )
        
        self.logger.debug(f"番組表解決: {schedule.area.name} mode={mode.value} "
                          f"reference={reference.isoformat()} "
                          f"{sum(len(row.entries) for row in rows)}番組")
        return ScheduleView(schedule.area, mode, reference, rows, schedule.warnings)
    
    @staticmethod
    def _select_now(entries: Sequence[ProgramEntry], reference: datetime) -> Tuple[ProgramEntry, ...]:
        """start <= reference < end の番組を二分探索"""
        starts = [entry.start for entry in entries]
        index = bisect_right(starts, reference) - 1
        if index >= 0 and entries[index].contains(reference):
            return (entries[index],)
        return ()
    
    @staticmethod
    def _select_window(entries: Sequence[ProgramEntry], window_start: datetime,
                       window_end: datetime) -> Tuple[ProgramEntry, ...]:
        return tuple(entry for entry in entries if entry.overlaps(window_start, window_end))
    
    @staticmethod
    def _order_channels(channels: Sequence[Channel],
                        channel_order: Optional[Sequence[str]]) -> List[Channel]:
        if not channel_order:
            return list(channels)
        rank: Dict[str, int] = {}
        for channel_id in channel_order:
            rank.setdefault(channel_id, len(rank))
        # 順序指定のないチャンネルは元の順序のまま末尾へ
        return sorted(channels, key=lambda channel: rank.get(channel.id, len(rank)))


def resolve(schedule: NormalizedSchedule, mode: ViewMode, reference: datetime,
            channel_order: Optional[Sequence[str]] = None) -> ScheduleView:
    """番組表を解決（便利関数）"""
    return ScheduleResolver().resolve(schedule, mode, reference, channel_order)
