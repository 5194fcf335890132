"""
番組表取得モジュール

番組表サイト（bangumi.org）から指定エリアの番組表HTMLを取得し、
RawListing の列に変換します。
- 地上波（放送局グループID指定）・BS・CSの番組表URL
- 表示モードに応じた放送日ページの選択（番組表の1日は5時始まり）
- 複数日ページの並列取得
- HTMLからのチャンネル名・番組時刻・番組名の抽出
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

import requests
from lxml import etree, html

from .area_resolver import Area, AreaKind
from .error_handler import FetchError
from .program_info import ProgramFlag, RawListing
from .schedule_resolver import ViewMode
from .utils.base import LoggerMixin
from .utils.datetime_utils import broadcast_date, get_timezone, to_zone
from .utils.network_utils import create_epg_session


class BangumiFetcher(LoggerMixin):
    """番組表取得クラス"""
    
    BASE_URL = "https://bangumi.org"
    AREA_PATHS = {
        AreaKind.TERRESTRIAL: "/epg/td",
        AreaKind.BS: "/epg/bs",
        AreaKind.CS: "/epg/cs",
    }
    
    CHANNEL_SELECTOR = "div#ch_area ul li.topmost p"
    PROGRAM_LINE_SELECTOR = "div#program_area > ul"
    TITLE_SELECTOR = "p.program_title"
    
    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: int = 30, max_workers: int = 8):
        super().__init__()
        self.session = session or create_epg_session(timeout=timeout)
        self.timeout = timeout
        self.max_workers = max_workers
    
    def build_url(self, area: Area) -> str:
        """エリアの番組表URLを生成"""
        return self.BASE_URL + self.AREA_PATHS[area.kind]
    
    def build_params(self, area: Area, page_date: Optional[date] = None) -> Dict[str, str]:
        """番組表URLのクエリパラメータを生成"""
        params = {}
        if page_date is not None:
            params["broad_cast_date"] = page_date.strftime("%Y%m%d")
        if area.kind is AreaKind.TERRESTRIAL:
            params["ggm_group_id"] = str(area.group_id)
        return params
    
    def page_dates(self, area: Area, mode: ViewMode, reference: datetime) -> List[date]:
        """表示モードに必要な放送日ページの日付
        
        各ページは放送日の5時から翌29時までを含むため、暦日0時からの表示期間を
        覆うには前日の放送日ページから取得する。
        """
        tz = get_timezone(area.timezone)
        if mode is ViewMode.NOW:
            return [broadcast_date(reference, tz)]
        
        first = to_zone(reference, tz).date() - timedelta(days=1)
        return [first + timedelta(days=i) for i in range(mode.window_days + 1)]
    
    def fetch(self, area: Area, mode: ViewMode, reference: datetime) -> List[RawListing]:
        """エリアの番組表を取得
        
        Raises:
            FetchError: 通信エラー・HTTPエラー・想定外のHTMLの場合
        """
        dates = self.page_dates(area, mode, reference)
        self.logger.info(f"番組表取得開始: {area.name} mode={mode.value} "
                         f"pages={[d.isoformat() for d in dates]}")
        
        if len(dates) == 1:
            pages = [self.fetch_page(area, dates[0])]
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(dates))) as executor:
                pages = list(executor.map(lambda d: self.fetch_page(area, d), dates))
        
        listings = [listing for page in pages for listing in page]
        self.logger.info(f"番組表取得完了: {area.name} {len(listings)}件")
        return listings
    
    def fetch_page(self, area: Area, page_date: Optional[date] = None) -> List[RawListing]:
        """1日分の番組表ページを取得して解析"""
        url = self.build_url(area)
        params = self.build_params(area, page_date)
        
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"番組表取得エラー: {url} {params} - {e}")
            raise FetchError(f"番組表の取得に失敗しました ({url}): {e}", url=url) from e
        
        return self.parse_page(response.text, url)
    
    def parse_page(self, page_html: str, url: str = "") -> List[RawListing]:
        """番組表HTMLを RawListing の列に変換"""
        try:
            tree = html.fromstring(page_html)
        except (etree.ParserError, ValueError) as e:
            raise FetchError(f"番組表の解析に失敗しました ({url}): {e}", url=url) from e
        
        channel_names = [node.text_content().strip() for node in tree.cssselect(self.CHANNEL_SELECTOR)]
        program_lines = tree.cssselect(self.PROGRAM_LINE_SELECTOR)
        if not channel_names or not program_lines:
            raise FetchError(f"番組表の形式が想定と異なります ({url})", url=url)
        
        if len(channel_names) != len(program_lines):
            self.logger.warning(f"チャンネル数と番組列数が一致しません: "
                                f"{len(channel_names)} != {len(program_lines)} ({url})")
        
        listings = []
        for index, line in enumerate(program_lines, start=1):
            channel_id = line.get("id") or f"program_line_{index}"
            # チャンネル名のない番組列は番組列IDを名前にする
            channel_name = channel_names[index - 1] if index <= len(channel_names) else channel_id
            for li in line.xpath("./li"):
                title_nodes = li.cssselect(self.TITLE_SELECTOR)
                if not title_nodes and li.get("s") is None:
                    self.logger.warning(f"番組名・時刻のない番組枠を除外しました: {channel_name} ({url})")
                    continue
                # 番組名がなければ空のまま渡し、正規化で警告付きで除外する
                title, flags = ProgramFlag.split_title(title_nodes[0].text_content() if title_nodes else "")
                listings.append(RawListing(
                    channel_id=channel_id,
                    channel_name=channel_name,
                    start=li.get("s", ""),
                    end=li.get("e", ""),
                    title=title,
                    flags=flags,
                ))
        
        self.logger.debug(f"番組表解析完了: {len(program_lines)}チャンネル, {len(listings)}件 ({url})")
        return listings
