"""
出力整形モジュール

解決済みの番組表（ScheduleView）を端末表示用のテキストに整形します。
"""

import os
from typing import IO, Iterable, List, Optional, Sequence

from .area_resolver import Area, AreaKind
from .error_handler import ScheduleWarning
from .schedule_resolver import AnnotatedEntry, ScheduleView, ViewMode


OFF_AIR_MESSAGE = "現在放送していません"
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# ANSIカラー
TV_COLOR = "\033[93m"   # bright yellow
BS_COLOR = "\033[96m"   # bright cyan
RESET = "\033[0m"


def should_use_color(stream: IO, setting="auto") -> bool:
    """色付け出力を行うかどうかを判定"""
    if setting is True or setting is False:
        return setting
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class OutputFormatter:
    """番組表テキスト整形クラス"""
    
    def __init__(self, color: bool = False):
        self.color = color
    
    def _paint(self, text: str, color_code: str) -> str:
        return f"{color_code}{text}{RESET}" if self.color else text
    
    def _channel_color(self, area: Area) -> str:
        return TV_COLOR if area.kind is AreaKind.TERRESTRIAL else BS_COLOR
    
    @staticmethod
    def _title(annotated: AnnotatedEntry) -> str:
        return "".join(annotated.markers) + annotated.title
    
    def format_view(self, view: ScheduleView) -> List[str]:
        """表示モードに応じて番組表を行のリストに整形"""
        if view.mode is ViewMode.NOW:
            return self._format_now(view)
        if view.mode is ViewMode.TODAY:
            return self._format_today(view)
        return self._format_week(view)
    
    def _format_now(self, view: ScheduleView) -> List[str]:
        color = self._channel_color(view.area)
        lines = []
        for row in view.rows:
            if row.is_off_air:
                lines.append(f"{row.channel.name} {OFF_AIR_MESSAGE}")
            else:
                lines.append(f"{self._paint(row.channel.name, color)} {self._title(row.entries[0])}")
        return lines
    
    def _format_today(self, view: ScheduleView) -> List[str]:
        color = self._channel_color(view.area)
        lines = []
        for row in view.rows:
            lines.append(self._paint(row.channel.name, color))
            for annotated in row.entries:
                lines.append(f"{annotated.start:%H:%M} ~ {annotated.end:%H:%M} {self._title(annotated)}")
        return lines
    
    def _format_week(self, view: ScheduleView) -> List[str]:
        lines = []
        for row in view.rows:
            for annotated in row.entries:
                start, end = annotated.start, annotated.end
                lines.append(
                    f"{row.channel.name} "
                    f"{WEEKDAYS[start.weekday()]} {start:%H:%M} ~ "
                    f"{WEEKDAYS[end.weekday()]} {end:%H:%M} {self._title(annotated)}"
                )
        return lines
    
    def format_area_header(self, area: Area) -> str:
        """複数エリア表示時の見出し"""
        return f"== {area.display_name} ({area.name}) =="
    
    def format_area_list(self, areas: Iterable[Area]) -> List[str]:
        """エリア一覧（BS・CSは強調表示）"""
        return [self._paint(area.name, TV_COLOR) if area.is_satellite else area.name
                for area in areas]
    
    @staticmethod
    def format_warnings(warnings: Sequence[ScheduleWarning]) -> List[str]:
        return [f"警告: {warning.message}" for warning in warnings]
    
    def write_lines(self, lines: Iterable[str], stream: IO) -> None:
        for line in lines:
            stream.write(line + "\n")
    
    def write_view(self, view: ScheduleView, stream: IO,
                   header: Optional[str] = None) -> None:
        if header:
            stream.write(header + "\n")
        self.write_lines(self.format_view(view), stream)
