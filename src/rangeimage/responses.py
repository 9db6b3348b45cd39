"""선택 결과나 오류로 람다 프록시 응답을 만든다."""

import html
import json
from enum import Enum

from .config import HandlerConfig, HeaderSet
from .errors import InvalidCategory, NotFound, RangeImageError


class Preference(str, Enum):
    REDIRECT = "redirect"
    JSON = "json"
    HTML = "html"


_HTML_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="referrer" content="no-referrer">
<title>{category}</title>
</head>
<body>
<a href="{url}"><img src="{url}" alt="{category}"></a>
</body>
</html>
"""


def preference_for(request) -> Preference:
    if request.param("json").strip().lower() == "true":
        return Preference.JSON
    accept = request.header("accept").lower()
    if "application/json" in accept:
        return Preference.JSON
    if "text/html" in accept:
        return Preference.HTML
    return Preference.REDIRECT


def _headers(config: HandlerConfig, **extra) -> dict:
    headers = {
        "Cache-Control": config.cache_control,
        "Access-Control-Allow-Origin": "*",
        "Referrer-Policy": "no-referrer",
    }
    if config.header_set is HeaderSet.HARDENED:
        headers.update({
            "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Vary": "Origin",
        })
    headers.update(extra)
    return headers


def _response(status_code: int, body: dict, config: HandlerConfig) -> dict:
    return {
        "statusCode": status_code,
        "headers": _headers(config, **{"Content-Type": "application/json"}),
        "body": json.dumps(body, ensure_ascii=False),
    }


def _redirect_response(location: str, config: HandlerConfig) -> dict:
    return {
        "statusCode": config.redirect_status,
        "headers": _headers(config, Location=location),
        "body": "",
    }


def _html_response(url: str, category: str, config: HandlerConfig) -> dict:
    page = _HTML_PAGE.format(url=html.escape(url, quote=True), category=html.escape(category))
    return {
        "statusCode": 200,
        "headers": _headers(config, **{"Content-Type": "text/html; charset=utf-8"}),
        "body": page,
    }


def format_selection(url: str | None, preference: Preference, category: str, config: HandlerConfig) -> dict:
    if url is None:
        return error_response(NotFound(), config)
    if preference is Preference.JSON:
        return _response(200, {"code": 200, "url": url, "type": category}, config)
    if preference is Preference.HTML:
        return _html_response(url, category, config)
    return _redirect_response(url, config)


def error_response(error: RangeImageError, config: HandlerConfig) -> dict:
    body = {"error": error.public_message}
    if isinstance(error, InvalidCategory):
        body["valid_types"] = error.valid_types
    return _response(error.status_code, body, config)


def internal_error_response(config: HandlerConfig) -> dict:
    return _response(500, {"error": "Internal Server Error"}, config)
