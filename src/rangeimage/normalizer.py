"""선택된 URL을 돌려주기 전에 적용하는 변환. I/O 없음."""

import re
from urllib.parse import SplitResult, urlencode, urlsplit, urlunsplit

from .config import HandlerConfig, NormalizePolicy, UrlPolicy
from .errors import MalformedUrl

# 리다이렉터가 직접 쓰는 파라미터. 대상 URL로 넘기지 않는다.
RESERVED_PARAMS = frozenset({"type", "json", "style"})

STYLE_PATTERN = re.compile(r"^[A-Za-z0-9_.,-]{1,64}$")


def _split(url: str) -> SplitResult | None:
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def _malformed(url: str, policy: UrlPolicy) -> str:
    if policy is UrlPolicy.LENIENT:
        return url
    raise MalformedUrl(url)


def strip_query(url: str, policy: UrlPolicy = UrlPolicy.STRICT) -> str:
    parts = _split(url)
    if parts is None:
        return _malformed(url, policy)
    return urlunsplit(parts._replace(query=""))


def _pairs(params):
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value


def merge_query(url: str, params=None, policy: UrlPolicy = UrlPolicy.STRICT) -> str:
    """`params`를 `url`의 쿼리 뒤에 붙인다.

    기존 파라미터는 그대로 두고, 같은 키가 여러 번 나오면 그대로 반복한다.
    """
    if not params:
        return url
    parts = _split(url)
    if parts is None:
        return _malformed(url, policy)
    extra = urlencode(list(_pairs(params)))
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit(parts._replace(query=query))


def apply_style(url: str, style: str | None, policy: UrlPolicy = UrlPolicy.STRICT) -> str:
    """경로 뒤에 `@style` 접미사를 넣는다. 쿼리 문자열은 유지."""
    if not style:
        return url
    parts = _split(url)
    if parts is None:
        return _malformed(url, policy)
    return urlunsplit(parts._replace(path=f"{parts.path}@{style}"))


def forwardable_params(params, allowed) -> dict:
    return {
        key: value
        for key, value in (params or {}).items()
        if key in allowed and key not in RESERVED_PARAMS
    }


def normalize(url: str, config: HandlerConfig, params=None) -> str:
    if config.normalize_policy is NormalizePolicy.STRIP:
        return strip_query(url, config.url_policy)
    if config.normalize_policy is NormalizePolicy.MERGE:
        return merge_query(url, forwardable_params(params, config.merge_keys), config.url_policy)
    return url
