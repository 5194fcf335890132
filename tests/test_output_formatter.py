"""
OutputFormatter単体テスト

NOW / TODAY / WEEK の表示形式、放送休止表示、色付け判定をテスト。
"""

import io
import unittest
from unittest.mock import patch

from tvnow.error_handler import ScheduleWarning, WarningKind
from tvnow.output_formatter import (
    BS_COLOR, OFF_AIR_MESSAGE, RESET, TV_COLOR, OutputFormatter, should_use_color
)
from tvnow.program_info import ProgramFlag
from tvnow.schedule_normalizer import normalize
from tvnow.schedule_resolver import ViewMode, resolve
from tests.utils.test_environment import BS, OSAKA, TOKYO, jst, raw


LISTINGS = [
    raw("1", "202410190900", "202410191000", "ニュース", flags=[ProgramFlag.SUBTITLED],
        channel_name="NHK総合"),
    raw("1", "202410192330", "202410200030", "深夜映画", channel_name="NHK総合"),
    raw("4", "202410191200", "202410191300", "情報番組", channel_name="日本テレビ"),
]


class TestOutputFormatter(unittest.TestCase):
    """表示形式のテスト"""
    
    def setUp(self):
        self.schedule = normalize(LISTINGS, TOKYO)
        self.formatter = OutputFormatter(color=False)
    
    def test_01_NOW表示(self):
        """放送中はマーカー付き番組名、放送なしは休止メッセージ"""
        view = resolve(self.schedule, ViewMode.NOW, jst(2024, 10, 19, 9, 30))
        
        self.assertEqual(self.formatter.format_view(view), [
            "NHK総合 [字]ニュース",
            f"日本テレビ {OFF_AIR_MESSAGE}",
        ])
    
    def test_02_TODAY表示(self):
        """チャンネル見出しの後に時刻範囲付きで番組を列挙"""
        view = resolve(self.schedule, ViewMode.TODAY, jst(2024, 10, 19, 9, 30))
        
        self.assertEqual(self.formatter.format_view(view), [
            "NHK総合",
            "09:00 ~ 10:00 [字]ニュース",
            "23:30 ~ 00:30 深夜映画",
            "日本テレビ",
            "12:00 ~ 13:00 情報番組",
        ])
    
    def test_03_WEEK表示(self):
        """各行にチャンネル名と曜日付きの時刻範囲"""
        view = resolve(self.schedule, ViewMode.WEEK, jst(2024, 10, 19, 9, 30))
        lines = self.formatter.format_view(view)
        
        # 2024-10-19 は土曜日
        self.assertEqual(lines, [
            "NHK総合 Sat 09:00 ~ Sat 10:00 [字]ニュース",
            "NHK総合 Sat 23:30 ~ Sun 00:30 深夜映画",
            "日本テレビ Sat 12:00 ~ Sat 13:00 情報番組",
        ])
    
    def test_04_色付け(self):
        """地上波は黄色、BS・CSは水色でチャンネル名を表示"""
        formatter = OutputFormatter(color=True)
        
        view = resolve(self.schedule, ViewMode.NOW, jst(2024, 10, 19, 9, 30))
        lines = formatter.format_view(view)
        self.assertEqual(lines[0], f"{TV_COLOR}NHK総合{RESET} [字]ニュース")
        self.assertEqual(lines[1], f"日本テレビ {OFF_AIR_MESSAGE}")
        
        bs_schedule = normalize([raw("BS1", "202410190900", "202410191000", "BSニュース")], BS)
        bs_view = resolve(bs_schedule, ViewMode.NOW, jst(2024, 10, 19, 9, 30))
        self.assertEqual(formatter.format_view(bs_view), [f"{BS_COLOR}BS1{RESET} BSニュース"])
    
    def test_05_エリア見出しと一覧(self):
        """複数エリア表示の見出しとエリア一覧"""
        self.assertEqual(self.formatter.format_area_header(OSAKA), "== 大阪 (osaka) ==")
        self.assertEqual(self.formatter.format_area_list([TOKYO, BS]), ["tokyo", "bs"])
        
        colored = OutputFormatter(color=True).format_area_list([TOKYO, BS])
        self.assertEqual(colored, ["tokyo", f"{TV_COLOR}bs{RESET}"])
    
    def test_06_ストリーム出力と警告(self):
        """write_view は見出し付きで行を書き出す"""
        view = resolve(self.schedule, ViewMode.NOW, jst(2024, 10, 19, 9, 30))
        stream = io.StringIO()
        
        self.formatter.write_view(view, stream, header="== 東京 (tokyo) ==")
        
        self.assertEqual(stream.getvalue().splitlines(), [
            "== 東京 (tokyo) ==",
            "NHK総合 [字]ニュース",
            f"日本テレビ {OFF_AIR_MESSAGE}",
        ])
        
        warning = ScheduleWarning(WarningKind.OVERLAP_CONFLICT, "1", "B", "重複: B")
        self.assertEqual(OutputFormatter.format_warnings([warning]), ["警告: 重複: B"])


class TestShouldUseColor(unittest.TestCase):
    """色付け判定のテスト"""
    
    def test_07_明示設定(self):
        self.assertTrue(should_use_color(io.StringIO(), True))
        self.assertFalse(should_use_color(io.StringIO(), False))
    
    def test_08_自動判定(self):
        """autoは端末かつNO_COLOR未設定の場合のみ色付け"""
        class TTY(io.StringIO):
            def isatty(self):
                return True
        
        with patch.dict("os.environ", {}, clear=True):
            self.assertTrue(should_use_color(TTY(), "auto"))
            self.assertFalse(should_use_color(io.StringIO(), "auto"))
        
        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            self.assertFalse(should_use_color(TTY(), "auto"))


if __name__ == "__main__":
    unittest.main()
