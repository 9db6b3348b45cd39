#!/usr/bin/env python3
"""
로컬 랜덤 이미지 확인용 스크립트 (DynamoDB Local 또는 실제 테이블 사용)

사용법:
  STORE_URI=http://localhost:8000 python3 scripts/local_run.py seed ysh urls.txt
  STORE_URI=http://localhost:8000 python3 scripts/local_run.py get ysh --json
"""

import argparse
import json
import os
import sys
from pathlib import Path

# 프로젝트 루트의 src 폴더를 경로에 추가 (rangeimage 임포트용)
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_SRC = os.path.join(_PROJECT_ROOT, "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from rangeimage.categories import DEFAULT_REGISTRY
from rangeimage.config import load_settings
from rangeimage.connection import ConnectionManager
from rangeimage.errors import ConfigError, RangeImageError
from rangeimage.handler import RandomImageHandler


def read_urls(path: Path) -> list[str]:
    """파일에서 빈 줄과 # 주석을 제외한 URL 목록을 읽습니다."""
    urls = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


def seed(connections: ConnectionManager, image_type: str, path: Path) -> int:
    """카테고리 테이블에 URL을 한 줄당 한 아이템으로 저장하고 개수를 반환합니다."""
    table_name = DEFAULT_REGISTRY.resolve(image_type)
    table = connections.get_connection().Table(table_name)
    urls = read_urls(path)
    with table.batch_writer(overwrite_by_pkeys=["url"]) as batch:
        for url in urls:
            batch.put_item(Item={"url": url})
    return len(urls)


def build_event(image_type: str, as_json: bool, as_html: bool, style: str | None) -> dict:
    params = {"type": image_type}
    if as_json:
        params["json"] = "true"
    if style:
        params["style"] = style
    headers = {"Accept": "text/html"} if as_html else {}
    return {
        "httpMethod": "GET",
        "path": "/",
        "queryStringParameters": params,
        "headers": headers,
        "requestContext": {"identity": {"sourceIp": "127.0.0.1"}},
    }


def main():
    parser = argparse.ArgumentParser(
        description="로컬 랜덤 이미지: seed(저장) / get(조회)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # seed: 텍스트 파일의 URL을 테이블에 저장
    p_seed = sub.add_parser("seed", help="URL 목록 파일을 카테고리 테이블에 저장합니다")
    p_seed.add_argument("type", help=f"카테고리 ({', '.join(DEFAULT_REGISTRY.valid_types)})")
    p_seed.add_argument("file", type=Path, help="한 줄에 URL 하나씩 적힌 파일")

    # get: 핸들러를 호출해 응답 출력
    p_get = sub.add_parser("get", help="리다이렉트 핸들러를 호출해 응답을 출력합니다")
    p_get.add_argument("type", help="카테고리")
    fmt = p_get.add_mutually_exclusive_group()
    fmt.add_argument("--json", action="store_true", help="JSON 응답 요청")
    fmt.add_argument("--html", action="store_true", help="HTML 응답 요청")
    p_get.add_argument("--style", help="이미지 스타일 접미사")

    args = parser.parse_args()

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"설정 오류: {e}", file=sys.stderr)
        sys.exit(2)
    connections = ConnectionManager(settings.store)

    if args.command == "seed":
        try:
            count = seed(connections, args.type, args.file)
        except RangeImageError as e:
            print(f"오류: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"{count}개 저장 완료")

    elif args.command == "get":
        handler = RandomImageHandler(
            settings.handler, connections, query_timeout=settings.store.read_timeout
        )
        response = handler(build_event(args.type, args.json, args.html, args.style), None)
        print(json.dumps(response, ensure_ascii=False, indent=2))
        if response["statusCode"] >= 400:
            sys.exit(1)


if __name__ == "__main__":
    main()
