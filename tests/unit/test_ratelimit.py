"""
분당 요청 제한 검증
"""

from rangeimage.ratelimit import RateLimiter


def test_limit_within_window():
    limiter = RateLimiter(3)
    assert [limiter.allow("a", now=t) for t in (0, 1, 2, 3)] == [True, True, True, False]


def test_window_slides():
    limiter = RateLimiter(2)
    assert limiter.allow("a", now=0)
    assert limiter.allow("a", now=30)
    assert not limiter.allow("a", now=59)
    assert limiter.allow("a", now=60.5)


def test_clients_are_independent():
    limiter = RateLimiter(1)
    assert limiter.allow("a", now=0)
    assert limiter.allow("b", now=0)
    assert not limiter.allow("a", now=1)


def test_zero_disables():
    limiter = RateLimiter(0)
    assert all(limiter.allow("a", now=0) for _ in range(1000))


def test_uses_clock_when_now_missing():
    ticks = iter([0.0, 100.0])
    limiter = RateLimiter(1, clock=lambda: next(ticks))
    assert limiter.allow("a")
    assert limiter.allow("a")


def test_idle_clients_are_cleaned_up_per_interval():
    """오래된 클라이언트 기록은 cleanup_interval마다 한 번 정리된다"""
    limiter = RateLimiter(5, cleanup_interval=300)
    for i in range(50):
        assert limiter.allow(f"client-{i}", now=0)
    assert limiter.tracked_clients == 50

    # 윈도우는 지났지만 정리 주기 전이면 그대로 둔다
    assert limiter.allow("late", now=120)
    assert limiter.tracked_clients == 51

    assert limiter.allow("later", now=301)
    assert limiter.tracked_clients == 1
