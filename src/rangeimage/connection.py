"""웜 컨테이너의 호출들이 함께 쓰는 DynamoDB 리소스 (단일 슬롯)."""

import logging
import threading

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import StoreConfig
from .errors import StoreUnavailable

logger = logging.getLogger(__name__)


class ConnectionManager:
    """boto3 DynamoDB 리소스를 처음 쓸 때 하나 만들고, 끊길 때까지 계속 돌려준다.

    생성은 락 안에서 한 번 더 확인한 뒤에 하므로 동시에 처음 호출되어도
    캐시되는 핸들은 하나뿐이다.
    연결 확인(ListTables)에서 ClientError가 나면 엔드포인트는 응답한 것이므로
    (예: 테이블 단위 IAM 정책에 ListTables 권한이 없는 경우) 연결은 정상으로 본다.
    """

    def __init__(self, store: StoreConfig, resource_factory=None):
        self._store = store
        self._factory = resource_factory or boto3.resource
        self._lock = threading.Lock()
        self._handle = None

    @property
    def cached(self):
        return self._handle

    def get_connection(self):
        handle = self._handle
        if handle is not None:
            return handle
        with self._lock:
            if self._handle is None:
                self._handle = self._connect()
            return self._handle

    def invalidate(self, handle) -> bool:
        """`handle`이 아직 캐시된 핸들이면 버린다. 버렸으면 True."""
        with self._lock:
            if handle is not None and self._handle is handle:
                self._handle = None
                logger.warning("Discarded broken DynamoDB connection")
                return True
            return False

    def reset(self) -> None:
        with self._lock:
            self._handle = None

    def ping(self) -> None:
        """캐시된 (없으면 새) 핸들로 저장소까지 왕복한다."""
        handle = self.get_connection()
        try:
            self._check(handle)
        except BotoCoreError as e:
            self.invalidate(handle)
            raise StoreUnavailable(f"DynamoDB ping failed: {type(e).__name__}") from e

    def _check(self, handle) -> None:
        try:
            handle.meta.client.list_tables(Limit=1)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "ClientError")
            logger.warning("DynamoDB reachable but ListTables was refused: %s", code)

    def _connect(self):
        config = Config(
            max_pool_connections=self._store.max_pool_connections,
            connect_timeout=self._store.connect_timeout,
            read_timeout=self._store.read_timeout,
            retries={"total_max_attempts": 1, "mode": "standard"},
        )
        try:
            handle = self._factory(
                "dynamodb",
                endpoint_url=self._store.endpoint_url,
                region_name=self._store.region,
                config=config,
            )
            self._check(handle)
        except BotoCoreError as e:
            logger.error("DynamoDB connection failed: %s", type(e).__name__)
            raise StoreUnavailable(f"could not connect to DynamoDB: {type(e).__name__}") from e
        logger.info("Opened DynamoDB connection (pool=%d)", self._store.max_pool_connections)
        return handle
