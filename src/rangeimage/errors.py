"""오류 분류. 각 오류는 응답할 HTTP 상태 코드를 가진다."""


class ConfigError(Exception):
    """콜드 스타트 시 환경 변수가 잘못된 경우."""


class RangeImageError(Exception):
    status_code = 500
    public_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class InvalidCategory(RangeImageError):
    status_code = 400

    def __init__(self, key, valid_types: list[str]):
        self.key = key
        self.valid_types = list(valid_types)
        super().__init__(f"invalid type parameter, supported types: {', '.join(self.valid_types)}")

    @property
    def public_message(self) -> str:
        return str(self)


class UnsupportedStyle(RangeImageError):
    status_code = 400

    @property
    def public_message(self) -> str:
        return str(self)


class NotFound(RangeImageError):
    status_code = 404
    public_message = "not found"


class RateLimited(RangeImageError):
    status_code = 429
    public_message = "too many requests"


class MalformedUrl(RangeImageError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"stored url is malformed: {url!r}")


class StoreUnavailable(RangeImageError):
    pass


class StoreQueryError(RangeImageError):
    def __init__(self, message: str, connection_lost: bool = False):
        self.connection_lost = connection_lost
        super().__init__(message)
