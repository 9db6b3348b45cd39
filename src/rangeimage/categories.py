"""카테고리 레지스트리: 짧은 `type` 키와 그 뒤의 DynamoDB 테이블."""

from .errors import InvalidCategory

DEFAULT_TABLES = {
    "ysh": "api_ysh",  # 원신 가로
    "yss": "api_yss",  # 원신 세로
    "xqh": "api_xqh",  # 스타레일 가로
    "xqs": "api_xqs",  # 스타레일 세로
    "bing": "api_bing",  # Bing 오늘의 배경화면
}

DEFAULT_STYLE_TYPES = frozenset({"ysh", "yss", "xqh", "xqs"})


class CategoryRegistry:
    def __init__(self, tables: dict[str, str], style_types=frozenset()):
        self._tables = {key.lower(): table for key, table in tables.items()}
        self._style_types = frozenset(key.lower() for key in style_types)

    @property
    def valid_types(self) -> list[str]:
        return list(self._tables)

    def resolve(self, key) -> str:
        """`key`의 테이블 이름을 반환한다. 모르는 키면 InvalidCategory."""
        normalized = (key or "").strip().lower()
        table = self._tables.get(normalized)
        if table is None:
            raise InvalidCategory(key, self.valid_types)
        return table

    def supports_style(self, key) -> bool:
        return (key or "").strip().lower() in self._style_types


DEFAULT_REGISTRY = CategoryRegistry(DEFAULT_TABLES, DEFAULT_STYLE_TYPES)
