"""DynamoDB 테이블에서 아이템 하나를 균등 확률로 뽑는다."""

import random
import time

from botocore.exceptions import BotoCoreError, ClientError, ReadTimeoutError
from botocore.exceptions import ConnectionError as BotoConnectionError

from .errors import StoreQueryError

# 연결 자체가 끊긴 경우: 캐시된 핸들을 버려야 한다
_CONNECTION_ERRORS = (BotoConnectionError, ReadTimeoutError)

_SYSTEM_RANDOM = random.SystemRandom()


def _scan_pages(table, table_name: str, deadline: float | None):
    params = {
        "ProjectionExpression": "#u",
        "ExpressionAttributeNames": {"#u": "url"},
    }
    while True:
        if deadline is not None and time.monotonic() >= deadline:
            raise StoreQueryError(f"{table_name}: timeout")
        resp = table.scan(**params)
        yield resp.get("Items", [])
        if "LastEvaluatedKey" not in resp:
            break
        params["ExclusiveStartKey"] = resp["LastEvaluatedKey"]


def sample_one(handle, table_name: str, rng=None, deadline: float | None = None) -> str | None:
    """`table_name`의 아이템 하나를 균등 확률로 골라 url을 반환한다.

    스캔 결과에 저수지 샘플링을 적용한다. i번째 아이템이 1/i 확률로 선택을
    교체하므로 테이블 전체를 메모리에 올리지 않아도 모든 아이템의 확률이 같다.
    `deadline`(time.monotonic 기준)이 지나면 다음 페이지를 읽지 않고
    StoreQueryError를 던진다.
    """
    rng = rng or _SYSTEM_RANDOM
    chosen = None
    seen = 0
    try:
        table = handle.Table(table_name)
        for items in _scan_pages(table, table_name, deadline):
            for item in items:
                seen += 1
                if rng.randrange(seen) == 0:
                    chosen = item
    except _CONNECTION_ERRORS as e:
        raise StoreQueryError(f"{table_name}: {type(e).__name__}", connection_lost=True) from e
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "ClientError")
        raise StoreQueryError(f"{table_name}: {code}") from e
    except BotoCoreError as e:
        raise StoreQueryError(f"{table_name}: {type(e).__name__}") from e

    if chosen is None:
        return None
    url = chosen.get("url")
    if not isinstance(url, str) or not url:
        return None
    return url
