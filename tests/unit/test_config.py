"""
환경 변수 설정 로딩 검증
"""

import pytest

from rangeimage.config import (
    HandlerConfig,
    HeaderSet,
    NormalizePolicy,
    UrlPolicy,
    load_settings,
    parse_store_uri,
)
from rangeimage.errors import ConfigError


def test_defaults():
    settings = load_settings({"STORE_URI": "dynamodb://ap-northeast-2"})

    assert settings.store.endpoint_url is None
    assert settings.store.region == "ap-northeast-2"
    assert settings.store.max_pool_connections == 10
    assert settings.handler.redirect_status == 302
    assert settings.handler.normalize_policy is NormalizePolicy.NONE
    assert settings.handler.url_policy is UrlPolicy.STRICT
    assert settings.handler.header_set is HeaderSet.MINIMAL
    assert settings.handler.cache_control == "no-store"
    assert settings.handler.merge_keys == frozenset()
    assert settings.handler.rate_limit_per_minute == 100
    assert settings.log_level == "INFO"


def test_overrides():
    settings = load_settings({
        "STORE_URI": "http://localhost:8000",
        "AWS_REGION": "us-east-1",
        "REDIRECT_STATUS": "303",
        "NORMALIZE_POLICY": "MERGE",
        "URL_POLICY": "lenient",
        "HEADER_SET": "hardened",
        "CACHE_CONTROL": "no-cache",
        "MERGE_QUERY_KEYS": "w, h,,",
        "RATE_LIMIT_PER_MINUTE": "0",
        "STORE_READ_TIMEOUT": "1.5",
        "LOG_LEVEL": "debug",
    })

    assert settings.store.endpoint_url == "http://localhost:8000"
    assert settings.store.region == "us-east-1"
    assert settings.store.read_timeout == 1.5
    assert settings.handler == HandlerConfig(
        redirect_status=303,
        normalize_policy=NormalizePolicy.MERGE,
        url_policy=UrlPolicy.LENIENT,
        header_set=HeaderSet.HARDENED,
        cache_control="no-cache",
        merge_keys=frozenset({"w", "h"}),
        rate_limit_per_minute=0,
    )
    assert settings.log_level == "DEBUG"


def test_store_uri_is_required():
    """연결 문자열이 없으면 콜드 스타트에서 실패한다"""
    with pytest.raises(ConfigError, match="STORE_URI"):
        load_settings({})


@pytest.mark.parametrize("uri", ["mongodb://host/api", "dynamodb://", "localhost:8000"])
def test_bad_store_uri(uri):
    with pytest.raises(ConfigError):
        parse_store_uri(uri)


@pytest.mark.parametrize("name,value", [
    ("REDIRECT_STATUS", "200"),
    ("REDIRECT_STATUS", "abc"),
    ("NORMALIZE_POLICY", "both"),
    ("CACHE_CONTROL", "public"),
    ("RATE_LIMIT_PER_MINUTE", "-1"),
    ("STORE_MAX_POOL", "0"),
    ("LOG_LEVEL", "LOUD"),
])
def test_invalid_values(name, value):
    with pytest.raises(ConfigError):
        load_settings({"STORE_URI": "dynamodb://ap-northeast-2", name: value})
