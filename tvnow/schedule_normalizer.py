"""
番組表正規化モジュール

取得した生の番組データ（RawListing）を、チャンネルごとに時刻順で
重複のない ProgramEntry の列に変換します。
- 時刻表現の解析とエリアのタイムゾーンへの変換
- 不正な番組（start >= end、時刻解析不能、番組名なし）の破棄と警告
- 開始時刻順（同時刻は短い番組を先）の並べ替え
- 同一番組の重複の統合、時間が重なる番組の破棄（先に始まる番組を優先）と警告
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple

from .area_resolver import Area
from .error_handler import ScheduleWarning, WarningKind
from .program_info import Channel, ProgramEntry, RawListing
from .utils.base import LoggerMixin
from .utils.datetime_utils import get_timezone, parse_listing_time


@dataclass(frozen=True)
class NormalizedSchedule:
    """正規化済み番組表"""
    area: Area
    channels: Tuple[Channel, ...]
    entries: Mapping[Channel, Tuple[ProgramEntry, ...]]
    warnings: Tuple[ScheduleWarning, ...] = ()
    
    def entries_for(self, channel: Channel) -> Tuple[ProgramEntry, ...]:
        return self.entries.get(channel, ())
    
    @property
    def program_count(self) -> int:
        return sum(len(entries) for entries in self.entries.values())


class ScheduleNormalizer(LoggerMixin):
    """番組表正規化クラス"""
    
    def normalize(self, raw_listings: Iterable[RawListing], area: Area) -> NormalizedSchedule:
        """生の番組データを正規化
        
        Args:
            raw_listings: 取得した番組データ
            area: 番組表のエリア（タイムゾーンの決定に使う）
            
        Returns:
            NormalizedSchedule: チャンネル出現順・チャンネル内時刻順の番組表
        """
        tz = get_timezone(area.timezone)
        warnings: List[ScheduleWarning] = []
        channels: Dict[str, Channel] = {}
        by_channel: Dict[Channel, List[ProgramEntry]] = {}
        
        for raw in raw_listings:
            channel = channels.get(raw.channel_id)
            if channel is None:
                channel = Channel(raw.channel_id, raw.channel_name or raw.channel_id)
                channels[raw.channel_id] = channel
                by_channel[channel] = []
            
            title = (raw.title or "").strip()
            if not title:
                self._warn(warnings, WarningKind.MALFORMED_ENTRY, raw.channel_id, "",
                           f"{channel.name}: 番組名のない番組を除外しました ({raw.start} - {raw.end})")
                continue
            
            try:
                start = parse_listing_time(raw.start, tz)
                end = parse_listing_time(raw.end, tz)
            except ValueError as e:
                self._warn(warnings, WarningKind.MALFORMED_ENTRY, raw.channel_id, title,
                           f"{channel.name}: 「{title}」の時刻を解析できないため除外しました ({e})")
                continue
            
            if start >= end:
                self._warn(warnings, WarningKind.MALFORMED_ENTRY, raw.channel_id, title,
                           f"{channel.name}: 「{title}」の終了時刻が開始時刻以前のため除外しました "
                           f"({start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M})")
                continue
            
            by_channel[channel].append(
                ProgramEntry(channel, start, end, title, frozenset(raw.flags))
            )
        
        entries = {
            channel: self._resolve_overlaps(channel, programs, warnings)
            for channel, programs in by_channel.items()
        }
        
        schedule = NormalizedSchedule(
            area=area,
            channels=tuple(channels.values()),
            entries=entries,
            warnings=tuple(warnings),
        )
        self.logger.info(f"番組表正規化完了: {area.name}, {len(schedule.channels)}チャンネル, "
                         f"{schedule.program_count}番組, 警告{len(warnings)}件")
        return schedule
    
    def _resolve_overlaps(self, channel: Channel, programs: List[ProgramEntry],
                          warnings: List[ScheduleWarning]) -> Tuple[ProgramEntry, ...]:
        """重複を統合してから時刻順に並べ、時間の重なりを取り除く"""
        kept: List[ProgramEntry] = []
        
        for entry in sorted(self._merge_duplicates(channel, programs),
                            key=lambda entry: (entry.start, entry.duration)):
            if not kept:
                kept.append(entry)
                continue
            
            previous = kept[-1]
            if entry.start < previous.end:
                self._warn(warnings, WarningKind.OVERLAP_CONFLICT, channel.id, entry.title,
                           f"{channel.name}: 「{entry.title}」({entry.start:%H:%M} - {entry.end:%H:%M}) が"
                           f"「{previous.title}」({previous.start:%H:%M} - {previous.end:%H:%M}) "
                           f"と重なるため除外しました")
                continue
            
            kept.append(entry)
        
        return tuple(kept)
    
    def _merge_duplicates(self, channel: Channel, programs: List[ProgramEntry]) -> List[ProgramEntry]:
        """開始・終了時刻と番組名が同じ番組を1件にまとめる（フラグは和集合）"""
        merged: Dict[Tuple, ProgramEntry] = {}
        for entry in programs:
            key = (entry.start, entry.end, entry.title)
            previous = merged.get(key)
            if previous is None:
                merged[key] = entry
                continue
            # 日ごとの番組表を跨ぐ番組は両日に現れる
            if entry.flags - previous.flags:
                merged[key] = ProgramEntry(channel, previous.start, previous.end, previous.title,
                                           previous.flags | entry.flags)
            self.logger.debug(f"重複番組を統合: {channel.name} {entry.title}")
        return list(merged.values())
    
    def _warn(self, warnings: List[ScheduleWarning], kind: WarningKind,
              channel_id: str, title: str, message: str) -> None:
        warnings.append(ScheduleWarning(kind, channel_id, title, message))
        self.logger.warning(message)


def normalize(raw_listings: Iterable[RawListing], area: Area) -> NormalizedSchedule:
    """番組表を正規化（便利関数）"""
    return ScheduleNormalizer().normalize(raw_listings, area)
