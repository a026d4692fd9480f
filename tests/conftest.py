"""Pytest configuration and fixtures.

실제 클러스터 대신 호출을 기록하는 가짜 클라이언트를 사용합니다.
"""

from __future__ import annotations

from typing import Any

import pytest

from esbundle.config import BundleConfig
from esbundle.mapping.collector import MetadataCollector

pytest_plugins = ["pytester"]


class FakeIndices:
    """indices API 호출 기록."""

    def __init__(self) -> None:
        self.existing: set[str] = set()
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on_delete = False

    def exists(self, index: str) -> bool:
        self.calls.append(("exists", {"index": index}))
        return index in self.existing

    def create(self, index: str, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("create", {"index": index, **kwargs}))
        self.existing.add(index)
        return {"acknowledged": True}

    def delete(self, index: str) -> dict[str, Any]:
        self.calls.append(("delete", {"index": index}))
        if self.fail_on_delete:
            raise ConnectionError("cluster unavailable")
        self.existing.discard(index)
        return {"acknowledged": True}

    def refresh(self, index: str) -> None:
        self.calls.append(("refresh", {"index": index}))

    def flush(self, index: str) -> None:
        self.calls.append(("flush", {"index": index}))

    def clear_cache(self, index: str) -> None:
        self.calls.append(("clear_cache", {"index": index}))

    def stats(self, index: str) -> dict[str, Any]:
        return {
            "indices": {
                index: {"primaries": {"docs": {"count": 3}, "store": {"size_in_bytes": 2048}}}
            }
        }

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeClient:
    """Elasticsearch 클라이언트 대역."""

    def __init__(self, params: Any = None, version: str = "8.13.0") -> None:
        self.params = params
        self.version = version
        self.reachable = True
        self.indices = FakeIndices()
        self.documents: dict[str, dict[str, Any]] = {}

    def ping(self) -> bool:
        return self.reachable

    def info(self) -> dict[str, Any]:
        return {"version": {"number": self.version}}

    def index(self, index: str, id: Any, document: dict[str, Any], refresh: Any = False) -> None:
        self.documents[str(id)] = document

    def count(self, index: str) -> dict[str, int]:
        return {"count": len(self.documents)}


class RecordingClientFactory:
    """ClientParams를 기록하고 FakeClient를 반환."""

    def __init__(self) -> None:
        self.params: list[Any] = []
        self.clients: list[FakeClient] = []

    def __call__(self, params: Any) -> FakeClient:
        self.params.append(params)
        client = FakeClient(params)
        self.clients.append(client)
        return client


class RecordingWarmer:
    def __init__(self, name: str = "warmer") -> None:
        self.name = name
        self.warmed: list[Any] = []

    def warm(self, connection: Any) -> None:
        self.warmed.append(connection)


MODULES: dict[str, Any] = {
    "catalog": {
        "proxy_path": "/cache/proxies/catalog",
        "types": {
            "product": {
                "class": "Product",
                "properties": {"title": {"type": "text"}, "price": {"type": "float"}},
            },
            "category": {
                "class": "Category",
                "properties": {"name": {"type": "keyword"}},
            },
        },
    },
    "reviews": {
        "proxy_path": "/cache/proxies/reviews",
        "mapping": {"dynamic": "strict"},
        "types": {
            "review": {
                "class": "Review",
                "properties": {"body": {"type": "text"}, "price": {"type": "double"}},
            },
        },
    },
    "blog": {
        "types": {
            "post": {"class": "Post", "properties": {"title": {"type": "text"}}},
        },
    },
}

CONFIG: dict[str, Any] = {
    "logging_path": "/tmp/esbundle-test.log",
    "connections": {
        "default": {
            "hosts": ["http://es1:9200", "http://es2:9200"],
            "index_name": "shop",
            "settings": {"number_of_shards": 1},
        },
        "blog": {
            "hosts": ["http://blog:9200"],
            "index_name": "blog",
            "auth": {"username": "elastic", "password": "secret"},
        },
    },
    "managers": {
        "default": {"connection": "default", "mappings": ["catalog", "reviews"]},
        "Blog": {"connection": "blog", "mappings": ["blog"], "debug": True},
    },
    "modules": MODULES,
}


@pytest.fixture
def config() -> BundleConfig:
    return BundleConfig.from_dict(CONFIG)


@pytest.fixture
def collector() -> MetadataCollector:
    return MetadataCollector(MODULES)


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()
