"""
pytest configuration and fixtures for radiko-guide tests
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from tests.utils.test_environment import TemporaryTestEnvironment


@pytest.fixture
def temp_env():
    """一時テスト環境fixture"""
    with TemporaryTestEnvironment() as env:
        yield env


@pytest.fixture(autouse=True)
def test_mode_environment(monkeypatch):
    """テストモードでのログ設定"""
    monkeypatch.setenv("RADIKO_GUIDE_TEST_MODE", "true")
    monkeypatch.setenv("RADIKO_GUIDE_CONSOLE_OUTPUT", "false")
    yield
