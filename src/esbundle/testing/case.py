"""실제 인덱스를 만들고 지우는 테스트 기반 클래스.

pytest xunit 스타일(setup_method / teardown_method) 클래스입니다.
esbundle.testing.plugin을 등록하면 테스트 호출이 get_number_of_retries()만큼 재시도됩니다.

Example:
    >>> class TestProducts(ElasticsearchTestCase):
    ...     config_path = "tests/app/elasticsearch.yaml"
    ...
    ...     def get_data_array(self):
    ...         return {"default": {"product": [{"_id": 1, "title": "foo"}]}}
    ...
    ...     def test_count(self):
    ...         repo = self.get_registry().repository("default", "Product")
    ...         assert repo.count() == 1
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, ClassVar

import pytest

from esbundle.connection.connection import Connection
from esbundle.errors import ConnectionNotFoundError
from esbundle.orm.manager import Manager
from esbundle.wiring.bundle import ElasticsearchBundle
from esbundle.wiring.registry import DEFAULT_MANAGER, ServiceRegistry

logger = logging.getLogger(__name__)

VERSION_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "lt": operator.lt,
    "<=": operator.le,
    "le": operator.le,
    ">": operator.gt,
    "gt": operator.gt,
    ">=": operator.ge,
    "ge": operator.ge,
    "==": operator.eq,
    "eq": operator.eq,
    "!=": operator.ne,
    "ne": operator.ne,
}


def parse_version(version: str) -> tuple[int, ...]:
    """버전 문자열을 정수 튜플로. 예: "8.13.0-SNAPSHOT" -> (8, 13, 0)"""
    return tuple(int(part) for part in re.findall(r"\d+", version))


def version_matches(current: str, target: str, comparator: str) -> bool:
    try:
        compare = VERSION_COMPARATORS[comparator]
    except KeyError:
        raise ValueError(f"Unknown version comparator '{comparator}'") from None
    return compare(parse_version(current), parse_version(target))


class ElasticsearchTestCase:
    """매니저별 인덱스를 준비/정리하는 테스트 기반 클래스."""

    config_path: ClassVar[str | Path | None] = None

    _bundle: ElasticsearchBundle | None = None
    _managers: dict[str, Manager]

    def setup_method(self, method: Any = None) -> None:
        self._managers = {}
        self._bundle = None
        self.get_registry()
        self.get_manager()

    def teardown_method(self, method: Any = None) -> None:
        for name, manager in getattr(self, "_managers", {}).items():
            try:
                manager.get_connection().drop_index()
            except Exception as e:
                logger.warning(f"Failed to drop index of manager '{name}': {e}")

    def get_number_of_retries(self) -> int:
        """테스트 재시도 횟수."""
        return 3

    def get_data_array(self) -> dict[str, dict[str, list[dict[str, Any]]]]:
        """인덱스에 채울 데이터. 서브클래스에서 재정의.

        Example:
            {
                "default": {
                    "product": [
                        {"_id": 1, "title": "foo"},
                        {"_id": 2, "title": "bar"},
                    ]
                }
            }
        """
        return {}

    def get_ignored_versions(self) -> list[tuple[str, str]]:
        """건너뛸 ES 버전 목록. [(버전, 비교연산자)], 예: [("1.2.7", "<="), ("1.2.9", "==")]"""
        return []

    def ignore_versions(self, connection: Connection) -> None:
        """현재 ES 버전이 무시 목록에 걸리면 테스트 skip."""
        ignored = self.get_ignored_versions()
        if not ignored:
            return
        current = connection.get_version_number()
        for version, comparator in ignored:
            if version_matches(current, version, comparator):
                pytest.skip(f"Elasticsearch version {current} not supported by this test.")

    def create_bundle(self) -> ElasticsearchBundle:
        """테스트용 번들 생성. 기본은 config_path 또는 ES_BUNDLE_CONFIG."""
        if self.config_path is not None:
            return ElasticsearchBundle.from_yaml(self.config_path)
        return ElasticsearchBundle.from_env()

    def get_bundle(self) -> ElasticsearchBundle:
        if self._bundle is None:
            self._bundle = self.create_bundle()
        return self._bundle

    def get_registry(self) -> ServiceRegistry:
        return self.get_bundle().boot()

    def remove_manager(self, name: str) -> None:
        """캐시에서 매니저를 빼고 인덱스를 삭제."""
        manager = self._managers.pop(name, None)
        if manager is not None:
            manager.get_connection().drop_index()

    def populate_elasticsearch_with_data(
        self,
        manager: Manager,
        data: Mapping[str, list[Mapping[str, Any]]],
    ) -> None:
        """{type: [document, ...]} 데이터를 bulk로 채우고 커밋."""
        if not data:
            return
        connection = manager.get_connection()
        for documents in data.values():
            for document in documents:
                connection.bulk("index", document)
        manager.commit()

    def get_manager(
        self,
        name: str = DEFAULT_MANAGER,
        create_index: bool = True,
        custom_mapping: Mapping[str, Any] | None = None,
    ) -> Manager:
        """매니저 조회. 캐시에 없으면 레지스트리에서 가져옵니다.

        Args:
            name: 매니저 이름
            create_index: 인덱스 drop 후 재생성 여부
            custom_mapping: 인덱스 생성 전에 덮어쓸 mappings

        Raises:
            ConnectionNotFoundError: 매니저가 없는 경우
        """
        if name in self._managers:
            manager = self._managers[name]
        else:
            registry = self.get_registry()
            if not registry.has_manager(name):
                raise ConnectionNotFoundError(name)
            manager = registry.manager(name)
            self._managers[name] = manager

        connection = manager.get_connection()
        self.ignore_versions(connection)

        if custom_mapping:
            connection.update_settings({"mappings": custom_mapping})

        if create_index:
            connection.drop_and_create_index()
            data = self.get_data_array()
            if data.get(name):
                self.populate_elasticsearch_with_data(manager, data[name])

        return manager
