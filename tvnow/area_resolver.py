"""
エリア解決モジュール

このモジュールはユーザー指定のエリア名から番組表のエリアを解決します。
- 地上波エリア・BS・CSの静的エリア表
- 大文字小文字を区別しない検索、日本語名での指定
- 環境変数 TV_AREA・設定ファイルによるデフォルトエリア
"""

import os
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from .error_handler import UnknownAreaError
from .utils.base import LoggerMixin


ENV_KEY = "TV_AREA"
DEFAULT_AREA = "tokyo"
DEFAULT_TIMEZONE = "Asia/Tokyo"


class AreaKind(Enum):
    """エリア種別"""
    TERRESTRIAL = "terrestrial"  # 地上波
    BS = "bs"                    # BS
    CS = "cs"                    # CS


@dataclass(frozen=True)
class Area:
    """エリア情報"""
    name: str              # エリア名（小文字、CLIでの指定名）
    group_id: int          # 番組表サイトの放送局グループID
    display_name: str      # 表示名（日本語）
    kind: AreaKind = AreaKind.TERRESTRIAL
    timezone: str = DEFAULT_TIMEZONE
    
    @property
    def is_satellite(self) -> bool:
        return self.kind is not AreaKind.TERRESTRIAL


# 対応エリア表（エリア名 -> Area）
AREAS: Mapping[str, Area] = MappingProxyType({area.name: area for area in (
    Area("bs", 0, "BS", AreaKind.BS),
    Area("cs", 255, "CS", AreaKind.CS),
    
    # 北海道
    Area("sapporo", 1, "札幌"),
    Area("asahikawa", 3, "旭川"),
    Area("muroran", 6, "室蘭"),
    Area("hakodate", 8, "函館"),
    Area("obihiro", 9, "帯広"),
    Area("kushiro", 10, "釧路"),
    Area("kitami", 12, "北見"),
    
    # 東北
    Area("aomori", 13, "青森"),
    Area("iwate", 16, "岩手"),
    Area("miyagi", 19, "宮城"),
    Area("akita", 22, "秋田"),
    Area("yamagata", 25, "山形"),
    Area("fukushima", 28, "福島"),
    
    # 関東
    Area("ibaragi", 31, "茨城"),
    Area("tochigi", 33, "栃木"),
    Area("gumma", 35, "群馬"),
    Area("saitama", 37, "埼玉"),
    Area("chiba", 40, "千葉"),
    Area("tokyo", 42, "東京"),
    Area("kanagawa", 45, "神奈川"),
    
    # 中部
    Area("yamanashi", 50, "山梨"),
    Area("nagano", 51, "長野"),
    Area("niigata", 56, "新潟"),
    Area("toyama", 58, "富山"),
    Area("ishikawa", 60, "石川"),
    Area("fukui", 62, "福井"),
    Area("gifu", 64, "岐阜"),
    Area("shizuoka", 67, "静岡"),
    Area("aichi", 73, "愛知"),
    Area("mie", 76, "三重"),
    
    # 近畿
    Area("shiga", 79, "滋賀"),
    Area("kyoto", 81, "京都"),
    Area("osaka", 84, "大阪"),
    Area("hyogo", 85, "兵庫"),
    Area("nara", 91, "奈良"),
    Area("wakayama", 93, "和歌山"),
    
    # 中国
    Area("tottori", 95, "鳥取"),
    Area("shimane", 96, "島根"),
    Area("okayama", 98, "岡山"),
    Area("hiroshima", 101, "広島"),
    Area("yamaguchi", 105, "山口"),
    
    # 四国
    Area("tokushima", 109, "徳島"),
    Area("kagawa", 110, "香川"),
    Area("ehime", 112, "愛媛"),
    Area("kochi", 116, "高知"),
    
    # 九州・沖縄
    Area("fukuoka", 117, "福岡"),
    Area("kitakyushu", 120, "北九州"),
    Area("saga", 122, "佐賀"),
    Area("nagasaki", 123, "長崎"),
    Area("kumamoto", 126, "熊本"),
    Area("oita", 127, "大分"),
    Area("miyazaki", 129, "宮崎"),
    Area("kagoshima", 131, "鹿児島"),
    Area("okinawa", 134, "沖縄"),
)})

# 別表記 -> エリア名
AREA_ALIASES: Mapping[str, str] = MappingProxyType({
    "ibaraki": "ibaragi",
    "gunma": "gumma",
    "hokkaido": "sapporo",
    "北海道": "sapporo",
    **{area.display_name: area.name for area in AREAS.values()},
})


class AreaResolver(LoggerMixin):
    """エリア解決クラス
    
    Args:
        environ: 環境変数のマッピング（省略時は os.environ）
        default_area: 設定ファイルのデフォルトエリア（環境変数より優先度が低い）
    """
    
    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 default_area: Optional[str] = None):
        super().__init__()
        self.environ = os.environ if environ is None else environ
        self.default_area = default_area or DEFAULT_AREA
    
    @classmethod
    def find_area(cls, token: Optional[str]) -> Optional[Area]:
        """エリア名からAreaを検索（見つからない場合はNone）"""
        if not token or not token.strip():
            return None
        
        key = token.strip().lower()
        area = AREAS.get(key)
        if area:
            return area
        
        alias = AREA_ALIASES.get(key)
        if alias is None and key[-1:] in ("県", "府", "都"):
            alias = AREA_ALIASES.get(key[:-1])
        return AREAS.get(alias) if alias else None
    
    def resolve(self, token: Optional[str] = None) -> Area:
        """エリア名を解決
        
        空の場合は 環境変数 TV_AREA -> 設定ファイル -> "tokyo" の順にフォールバックする。
        
        Raises:
            UnknownAreaError: 対応エリアに一致しない場合
        """
        source = "引数"
        if not token or not token.strip():
            token = self.environ.get(ENV_KEY, "")
            source = f"環境変数 {ENV_KEY}"
        if not token or not token.strip():
            token = self.default_area
            source = "デフォルト"
        
        area = self.find_area(token)
        if area is None:
            self.logger.warning(f"未対応のエリア指定（{source}）: {token}")
            raise UnknownAreaError(token.strip(), self.area_names())
        
        self.logger.debug(f"エリア解決: {token} -> {area.name} (group_id={area.group_id}, {source})")
        return area
    
    def resolve_all(self, tokens: List[str]) -> List[Area]:
        """複数のエリア名を解決（空リストはデフォルトエリア1件）"""
        if not tokens:
            return [self.resolve(None)]
        return [self.resolve(token) for token in tokens]
    
    @staticmethod
    def list_areas() -> List[Area]:
        """全エリアをエリア名順で返す"""
        return sorted(AREAS.values(), key=lambda area: area.name)
    
    @classmethod
    def area_names(cls) -> List[str]:
        """全エリア名をソートして返す"""
        return [area.name for area in cls.list_areas()]
