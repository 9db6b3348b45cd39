"""
헬스 체크 람다
GET /status -> DynamoDB 연결 상태와 가동 시간 반환
"""

import json
import logging
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rangeimage.categories import DEFAULT_REGISTRY
from rangeimage.config import load_settings
from rangeimage.connection import ConnectionManager
from rangeimage.errors import StoreUnavailable

logger = logging.getLogger(__name__)

_SETTINGS = load_settings()
_CONNECTIONS = ConnectionManager(_SETTINGS.store)
_STARTED = time.monotonic()


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Cache-Control": "no-store",
            "Access-Control-Allow-Origin": "*",
        },
        "body": json.dumps(body),
    }


def check_health(connections, registry=DEFAULT_REGISTRY, started: float = _STARTED) -> dict:
    status = {
        "status": "healthy",
        "db_status": "connected",
        "uptime": f"{time.monotonic() - started:.0f}s",
        "valid_types": registry.valid_types,
    }
    try:
        connections.ping()
    except StoreUnavailable as e:
        logger.error("Health check failed: %s", e)
        status["status"] = "degraded"
        status["db_status"] = "error"
    return status


def handler(event, context):
    return _response(200, check_health(_CONNECTIONS))
