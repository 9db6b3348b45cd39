"""환경 변수 설정. 콜드 스타트 때 한 번 읽는다."""

import os
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

from .errors import ConfigError

REDIRECT_STATUSES = (301, 302, 303, 307)
CACHE_CONTROL_VALUES = ("no-store", "no-cache")


class NormalizePolicy(str, Enum):
    NONE = "none"
    STRIP = "strip"
    MERGE = "merge"


class UrlPolicy(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


class HeaderSet(str, Enum):
    MINIMAL = "minimal"
    HARDENED = "hardened"


@dataclass(frozen=True)
class HandlerConfig:
    redirect_status: int = 302
    normalize_policy: NormalizePolicy = NormalizePolicy.NONE
    url_policy: UrlPolicy = UrlPolicy.STRICT
    header_set: HeaderSet = HeaderSet.MINIMAL
    cache_control: str = "no-store"
    merge_keys: frozenset = field(default_factory=frozenset)
    rate_limit_per_minute: int = 100

    def __post_init__(self):
        if self.redirect_status not in REDIRECT_STATUSES:
            raise ConfigError(f"REDIRECT_STATUS must be one of {REDIRECT_STATUSES}")
        if self.cache_control not in CACHE_CONTROL_VALUES:
            raise ConfigError(f"CACHE_CONTROL must be one of {CACHE_CONTROL_VALUES}")
        if self.rate_limit_per_minute < 0:
            raise ConfigError("RATE_LIMIT_PER_MINUTE must be >= 0")


@dataclass(frozen=True)
class StoreConfig:
    endpoint_url: str | None
    region: str | None
    max_pool_connections: int = 10
    connect_timeout: float = 2
    read_timeout: float = 3

    def __post_init__(self):
        if self.max_pool_connections < 1:
            raise ConfigError("STORE_MAX_POOL must be >= 1")
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ConfigError("store timeouts must be > 0")


@dataclass(frozen=True)
class Settings:
    store: StoreConfig
    handler: HandlerConfig
    log_level: str = "INFO"


def parse_store_uri(uri: str, default_region: str | None = None) -> tuple[str | None, str | None]:
    """STORE_URI를 (endpoint_url, region)으로 나눈다.

    `dynamodb://<region>`은 해당 리전의 관리형 서비스,
    `http(s)://host[:port]`는 DynamoDB Local 같은 명시적 엔드포인트.
    """
    uri = (uri or "").strip()
    if not uri:
        raise ConfigError("STORE_URI is required")
    parts = urlsplit(uri)
    if parts.scheme == "dynamodb":
        if not parts.netloc:
            raise ConfigError("STORE_URI must name a region: dynamodb://<region>")
        return None, parts.netloc
    if parts.scheme in ("http", "https") and parts.netloc:
        return uri, default_region
    raise ConfigError("STORE_URI must be dynamodb://<region> or an http(s) endpoint")


def _choice(environ, name: str, enum_type, default):
    raw = environ.get(name, default.value).strip().lower()
    try:
        return enum_type(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"{name} must be one of: {allowed}") from None


def _number(environ, name: str, default, cast=int):
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ

    endpoint_url, region = parse_store_uri(
        environ.get("STORE_URI", ""),
        default_region=environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION"),
    )
    store = StoreConfig(
        endpoint_url=endpoint_url,
        region=region,
        max_pool_connections=_number(environ, "STORE_MAX_POOL", 10),
        connect_timeout=_number(environ, "STORE_CONNECT_TIMEOUT", 2, float),
        read_timeout=_number(environ, "STORE_READ_TIMEOUT", 3, float),
    )

    merge_keys = frozenset(
        key.strip() for key in environ.get("MERGE_QUERY_KEYS", "").split(",") if key.strip()
    )
    handler = HandlerConfig(
        redirect_status=_number(environ, "REDIRECT_STATUS", 302),
        normalize_policy=_choice(environ, "NORMALIZE_POLICY", NormalizePolicy, NormalizePolicy.NONE),
        url_policy=_choice(environ, "URL_POLICY", UrlPolicy, UrlPolicy.STRICT),
        header_set=_choice(environ, "HEADER_SET", HeaderSet, HeaderSet.MINIMAL),
        cache_control=environ.get("CACHE_CONTROL", "no-store").strip().lower(),
        merge_keys=merge_keys,
        rate_limit_per_minute=_number(environ, "RATE_LIMIT_PER_MINUTE", 100),
    )

    log_level = environ.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"LOG_LEVEL {log_level!r} is not a logging level")

    return Settings(store=store, handler=handler, log_level=log_level)
