"""
ConfigManager単体テスト

設定ファイルの読み込み（デフォルト値・上書き・破損時のフォールバック）と
検証をテスト。
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from tvnow.error_handler import ConfigurationError
from tvnow.utils.config_utils import DEFAULT_CONFIG, ConfigManager, load_json_config


class TestConfigManager(unittest.TestCase):
    """ConfigManagerのテスト"""
    
    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_path = self.temp_dir / "config.json"
    
    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)
    
    def test_01_ファイルなしはデフォルト設定(self):
        config = ConfigManager(self.config_path).load_config()
        
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config, DEFAULT_CONFIG)
    
    def test_02_ファイルの値で上書き(self):
        self.config_path.write_text(json.dumps({"default_area": "osaka", "max_workers": 2}),
                                    encoding="utf-8")
        
        config = ConfigManager(self.config_path).load_config()
        
        self.assertEqual(config["default_area"], "osaka")
        self.assertEqual(config["max_workers"], 2)
        self.assertEqual(config["request_timeout"], DEFAULT_CONFIG["request_timeout"])
    
    def test_03_壊れたファイルはデフォルト設定(self):
        for content in ["{not json", "[1, 2, 3]"]:
            with self.subTest(content=content):
                self.config_path.write_text(content, encoding="utf-8")
                self.assertEqual(ConfigManager(self.config_path).load_config(), DEFAULT_CONFIG)
    
    def test_04_検証成功(self):
        manager = ConfigManager(self.config_path)
        self.assertTrue(manager.validate_config(dict(DEFAULT_CONFIG)))
        self.assertTrue(manager.validate_config(dict(DEFAULT_CONFIG, color=True, request_timeout=2.5)))
    
    def test_05_検証エラー(self):
        manager = ConfigManager(self.config_path)
        invalid = [
            {"request_timeout": 0},
            {"request_timeout": "30"},
            {"max_workers": 0},
            {"max_workers": True},
            {"color": "always"},
            {"default_area": None},
        ]
        for override in invalid:
            with self.subTest(override=override):
                with self.assertRaises(ConfigurationError):
                    manager.validate_config(dict(DEFAULT_CONFIG, **override))
        
        config = dict(DEFAULT_CONFIG)
        del config["max_workers"]
        with self.assertRaises(ConfigurationError):
            manager.validate_config(config)
    
    def test_06_関数版(self):
        self.config_path.write_text(json.dumps({"max_workers": -1}), encoding="utf-8")
        
        with self.assertRaises(ConfigurationError):
            load_json_config(self.config_path)


if __name__ == "__main__":
    unittest.main()
