"""
랜덤 이미지 리다이렉트 람다
GET /?type=<category>[&json=true][&style=<style>] -> 카테고리 테이블에서 URL 하나를 골라 리다이렉트
"""

import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rangeimage.config import load_settings
from rangeimage.connection import ConnectionManager
from rangeimage.handler import RandomImageHandler

# Cold start: a missing or invalid STORE_URI fails the init phase, not a request.
_SETTINGS = load_settings()

logging.getLogger().setLevel(_SETTINGS.log_level)

_CONNECTIONS = ConnectionManager(_SETTINGS.store)
_HANDLER = RandomImageHandler(
    _SETTINGS.handler, _CONNECTIONS, query_timeout=_SETTINGS.store.read_timeout
)


def handler(event, context):
    return _HANDLER(event, context)
