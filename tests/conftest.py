"""
pytest configuration and fixtures for TVNow tests
"""

import os
import sys

import pytest

# プロジェクトルートをパスに追加
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """テストセッション全体の環境設定"""
    os.environ["TVNOW_TEST_MODE"] = "true"
    os.environ.pop("TV_AREA", None)
    
    yield
    
    os.environ.pop("TVNOW_TEST_MODE", None)
