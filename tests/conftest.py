"""
공용 테스트 설정 - src 경로 추가, 환경 변수, 공용 fixture
"""

import os
import sys

import pytest

_TESTS = os.path.dirname(__file__)

# src 경로 추가 (rangeimage 및 람다 함수 임포트용)
sys.path.insert(0, os.path.join(_TESTS, "..", "src"))
sys.path.insert(0, _TESTS)

# 람다 모듈은 임포트 시점에 설정을 읽으므로 먼저 채워 둔다
os.environ.setdefault("STORE_URI", "http://localhost:8000")
os.environ.setdefault("AWS_REGION", "ap-northeast-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from fakes import CountingFactory  # noqa: E402
from rangeimage.config import HandlerConfig, StoreConfig  # noqa: E402
from rangeimage.connection import ConnectionManager  # noqa: E402


@pytest.fixture
def store_config():
    return StoreConfig(endpoint_url="http://localhost:8000", region="ap-northeast-2")


@pytest.fixture
def handler_config():
    return HandlerConfig(rate_limit_per_minute=0)


@pytest.fixture
def make_connections(store_config):
    """Returns (manager, factory) for a manager that always builds `resource`."""
    def _make(resource):
        factory = CountingFactory(lambda: resource)
        return ConnectionManager(store_config, resource_factory=factory), factory
    return _make
