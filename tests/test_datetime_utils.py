"""
日時処理ユーティリティの単体テスト
"""

import unittest
from datetime import date, datetime

import pytz

from tvnow.utils.datetime_utils import (
    broadcast_date, get_timezone, local_day_window, local_midnight, parse_listing_time
)
from tests.utils.test_environment import JST, jst


class TestParseListingTime(unittest.TestCase):
    """番組表時刻の解析テスト"""
    
    def test_supported_formats(self):
        """各種時刻表現が同じ瞬間に解析される"""
        expected = jst(2024, 10, 19, 9, 0)
        values = [
            "20241019090000",
            "202410190900",
            "2024-10-19T09:00:00",
            "2024-10-19 09:00",
            "2024-10-19T00:00:00Z",
            "2024-10-19T09:00:00+09:00",
            int(expected.timestamp()),
            datetime(2024, 10, 19, 9, 0),
            expected.astimezone(pytz.utc),
        ]
        for value in values:
            with self.subTest(value=value):
                parsed = parse_listing_time(value, JST)
                self.assertEqual(parsed, expected)
                self.assertEqual(parsed.tzinfo.zone, "Asia/Tokyo")
    
    def test_invalid_values(self):
        for value in ["", "  ", "not a time", "2024-13-40 25:00", None, True, 10 ** 20, float("inf")]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_listing_time(value, JST)


class TestLocalWindows(unittest.TestCase):
    """ローカル時刻基準の期間計算テスト"""
    
    def test_local_midnight(self):
        """UTCでは前日でもJSTの暦日の0時"""
        instant = jst(2024, 10, 19, 8, 0).astimezone(pytz.utc)
        self.assertEqual(local_midnight(instant, JST), jst(2024, 10, 19))
    
    def test_local_day_window(self):
        self.assertEqual(local_day_window(jst(2024, 10, 19, 23, 59), JST),
                         (jst(2024, 10, 19), jst(2024, 10, 20)))
        self.assertEqual(local_day_window(jst(2024, 10, 19, 0, 0), JST, 7),
                         (jst(2024, 10, 19), jst(2024, 10, 26)))
    
    def test_window_across_dst(self):
        """夏時間の切り替え日も暦日0時で区切る"""
        tz = get_timezone("America/New_York")
        start, end = local_day_window(tz.localize(datetime(2024, 3, 10, 12, 0)), tz)
        
        self.assertEqual((start.hour, end.hour), (0, 0))
        self.assertEqual((end - start).total_seconds(), 23 * 3600)
    
    def test_broadcast_date(self):
        """5時より前は前日の放送日"""
        self.assertEqual(broadcast_date(jst(2024, 10, 19, 4, 59), JST), date(2024, 10, 18))
        self.assertEqual(broadcast_date(jst(2024, 10, 19, 5, 0), JST), date(2024, 10, 19))


if __name__ == "__main__":
    unittest.main()
