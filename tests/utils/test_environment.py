"""
テスト用共通ユーティリティ

番組データ・番組表HTMLの生成ヘルパーを提供します。
"""

from datetime import datetime
from typing import List, Sequence, Tuple

import pytz

from tvnow.area_resolver import AreaResolver
from tvnow.program_info import RawListing


JST = pytz.timezone('Asia/Tokyo')

TOKYO = AreaResolver.find_area("tokyo")
OSAKA = AreaResolver.find_area("osaka")
BS = AreaResolver.find_area("bs")


def jst(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """JSTのaware datetimeを生成"""
    return JST.localize(datetime(year, month, day, hour, minute))


def raw(channel_id: str, start, end, title: str, flags=(), channel_name: str = None) -> RawListing:
    """RawListingを簡潔に生成"""
    return RawListing(channel_id, channel_name or channel_id, start, end, title, frozenset(flags))


def build_epg_html(channels: Sequence[Tuple[str, List[Tuple[str, str, str]]]]) -> str:
    """番組表ページ相当のHTMLを生成
    
    Args:
        channels: [(チャンネル名, [(s属性, e属性, 番組名), ...]), ...]
    """
    channel_items = "".join(
        f'<li class="js_channel topmost"><p>{name}</p></li>' for name, _ in channels
    )
    program_lines = "".join(
        f'<ul id="program_line_{index}">' + "".join(
            f'<li class="sc-future" s="{s}" e="{e}">'
            f'<div class="program_time">{s[8:10]}:{s[10:12]}</div>'
            f'<a class="title_link" href="/tv_events/{index}{s}"><p class="program_title">{title}</p></a>'
            f'</li>'
            for s, e, title in programs
        ) + '</ul>'
        for index, (_, programs) in enumerate(channels, start=1)
    )
    return (
        '<html><head><title>番組表</title></head><body>'
        '<div id="contents">'
        f'<div id="ch_area"><ul>{channel_items}</ul></div>'
        f'<div id="program_area">{program_lines}</div>'
        '</div></body></html>'
    )
