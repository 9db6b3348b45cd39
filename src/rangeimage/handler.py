"""랜덤 이미지 리다이렉트 요청 처리 흐름."""

import logging
import time
from enum import Enum

from .categories import DEFAULT_REGISTRY
from .config import HandlerConfig
from .errors import RangeImageError, RateLimited, StoreQueryError, UnsupportedStyle
from .normalizer import STYLE_PATTERN, apply_style, normalize
from .ratelimit import RateLimiter
from .request import request_from_event
from .responses import error_response, format_selection, internal_error_response, preference_for
from .selector import sample_one

logger = logging.getLogger(__name__)


class State(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    CONNECTED = "connected"
    SAMPLED = "sampled"
    NORMALIZED = "normalized"
    FORMATTED = "formatted"
    RESPONDED = "responded"
    ERRORED = "errored"


class RandomImageHandler:
    """검증 → 연결 → 샘플링 → 정규화 → 응답 생성.

    어느 단계든 실패하면 바로 ERRORED로 넘어가 한 번만 응답한다. 여기서는 재시도하지 않는다.
    `query_timeout`(초)은 한 요청이 스캔 전체에 쓸 수 있는 시간이다.
    """

    def __init__(
        self,
        config: HandlerConfig,
        connections,
        registry=DEFAULT_REGISTRY,
        sampler=sample_one,
        rate_limiter: RateLimiter | None = None,
        rng=None,
        query_timeout: float | None = None,
    ):
        self.config = config
        self.connections = connections
        self.registry = registry
        self.sampler = sampler
        self.rate_limiter = rate_limiter or RateLimiter(config.rate_limit_per_minute)
        self.rng = rng
        self.query_timeout = query_timeout

    def __call__(self, event, context=None) -> dict:
        started = time.perf_counter()
        request = request_from_event(event)
        category = request.param("type").strip().lower()
        state = State.RECEIVED
        handle = None

        try:
            if not self.rate_limiter.allow(request.source_ip or "anonymous"):
                raise RateLimited()

            table = self.registry.resolve(category)
            style = request.param("style").strip()
            if style:
                if not self.registry.supports_style(category):
                    raise UnsupportedStyle(f"type {category!r} does not support style")
                if not STYLE_PATTERN.match(style):
                    raise UnsupportedStyle("invalid style parameter")
            state = State.VALIDATED

            handle = self.connections.get_connection()
            state = State.CONNECTED

            deadline = None
            if self.query_timeout is not None:
                deadline = time.monotonic() + self.query_timeout
            url = self.sampler(handle, table, rng=self.rng, deadline=deadline)
            state = State.SAMPLED

            if url is not None:
                url = normalize(url, self.config, request.params)
                url = apply_style(url, style, self.config.url_policy)
            state = State.NORMALIZED

            response = format_selection(url, preference_for(request), category, self.config)
            state = State.FORMATTED
        except RangeImageError as e:
            if isinstance(e, StoreQueryError) and e.connection_lost:
                self.connections.invalidate(handle)
            self._log_failure(e, category, state, started)
            return error_response(e, self.config)
        except Exception:
            logger.exception(
                "Unexpected failure type=%s state=%s elapsed_ms=%.1f",
                category, state.value, _elapsed_ms(started),
            )
            return internal_error_response(self.config)

        state = State.RESPONDED
        logger.info(
            "Served type=%s status=%d state=%s elapsed_ms=%.1f",
            category, response["statusCode"], state.value, _elapsed_ms(started),
        )
        return response

    def _log_failure(self, error: RangeImageError, category: str, state: State, started: float) -> None:
        level = logging.WARNING if error.status_code < 500 else logging.ERROR
        logger.log(
            level,
            "Request failed type=%s state=%s error=%s status=%d elapsed_ms=%.1f: %s",
            category or "-", state.value, type(error).__name__, error.status_code,
            _elapsed_ms(started), error,
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
