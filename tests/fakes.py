"""In-memory stand-ins for the boto3 DynamoDB resource used by the tests."""

import time


class FakeTable:
    """Scan pages served from memory. `error` is raised on every scan,
    `delay` seconds are slept before each page."""

    def __init__(self, pages, error=None, delay=0.0):
        self.pages = [list(page) for page in pages]
        self.error = error
        self.delay = delay
        self.scans = 0

    def scan(self, **params):
        self.scans += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        index = params.get("ExclusiveStartKey", {}).get("page", 0)
        resp = {"Items": self.pages[index] if self.pages else []}
        if index + 1 < len(self.pages):
            resp["LastEvaluatedKey"] = {"page": index + 1}
        return resp


class FakeClient:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def list_tables(self, **params):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return {"TableNames": []}


class FakeMeta:
    def __init__(self, client):
        self.client = client


class FakeResource:
    def __init__(self, tables=None, ping_error=None):
        self.tables = tables or {}
        self.meta = FakeMeta(FakeClient(ping_error))

    def Table(self, name):
        return self.tables.setdefault(name, FakeTable([]))


def items(*urls):
    return [{"url": url} for url in urls]


class CountingFactory:
    """Stands in for boto3.resource; each call builds a new FakeResource."""

    def __init__(self, build=None):
        self.build = build or (lambda: FakeResource())
        self.calls = []

    def __call__(self, service, **kwargs):
        self.calls.append((service, kwargs))
        return self.build()


def api_event(params=None, headers=None, source_ip="203.0.113.7"):
    return {
        "httpMethod": "GET",
        "path": "/",
        "queryStringParameters": params,
        "headers": headers,
        "requestContext": {"identity": {"sourceIp": source_ip}},
    }
