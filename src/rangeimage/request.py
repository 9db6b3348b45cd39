"""API Gateway 프록시 이벤트(REST v1, HTTP API v2)를 Request로 정규화."""

from dataclasses import dataclass, field


@dataclass
class Request:
    method: str = "GET"
    path: str = "/"
    params: dict = field(default_factory=dict)
    headers: dict = field(default_factory=dict)
    source_ip: str = ""

    def param(self, name: str, default: str = "") -> str:
        value = self.params.get(name, default)
        if isinstance(value, list):
            return value[-1] if value else default
        return value

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)


def request_from_event(event: dict) -> Request:
    event = event or {}
    context = event.get("requestContext") or {}
    http = context.get("http") or {}

    params = dict(event.get("queryStringParameters") or {})
    for key, values in (event.get("multiValueQueryStringParameters") or {}).items():
        if values and len(values) > 1:
            params[key] = list(values)

    headers = {
        str(key).lower(): value
        for key, value in (event.get("headers") or {}).items()
        if value is not None
    }

    return Request(
        method=(event.get("httpMethod") or http.get("method") or "GET").upper(),
        path=event.get("path") or event.get("rawPath") or "/",
        params=params,
        headers=headers,
        source_ip=(context.get("identity") or {}).get("sourceIp") or http.get("sourceIp") or "",
    )
