"""ES 커넥션.

클라이언트 핸들, 컴파일된 인덱스 파라미터, 부착된 워머를 묶습니다.
와이어링 단계가 유일한 작성자이며 이후에는 읽기 위주로 공유됩니다.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from elasticsearch.helpers import bulk

from esbundle.connection.client import check_connection
from esbundle.core.protocols import WarmerProtocol
from esbundle.core.types import CompiledIndexParams
from esbundle.mapping.merge import deep_merge

logger = logging.getLogger(__name__)

BULK_OPERATIONS = ("index", "create", "update", "delete")


@dataclass
class IndexInfo:
    """인덱스 정보."""

    name: str
    exists: bool
    doc_count: int = 0
    size_bytes: int = 0


class Connection:
    """클라이언트 + 인덱스 파라미터 + 워머."""

    def __init__(self, client: Any, index_params: CompiledIndexParams):
        self.client = client
        self._index_params = index_params
        self._warmers: list[WarmerProtocol] = []
        self._bulk_actions: list[dict[str, Any]] = []

    @property
    def index_name(self) -> str:
        return self._index_params.index

    @property
    def index_params(self) -> CompiledIndexParams:
        return self._index_params

    # =========================================================================
    # Warmers
    # =========================================================================

    def add_warmer(self, warmer: WarmerProtocol) -> None:
        """워머 부착. 중복 제거 없이 부착 순서 유지."""
        self._warmers.append(warmer)

    @property
    def warmers(self) -> list[WarmerProtocol]:
        return list(self._warmers)

    def warm_up(self) -> None:
        """부착된 워머를 순서대로 실행."""
        for warmer in self._warmers:
            warmer.warm(self)

    # =========================================================================
    # Index
    # =========================================================================

    def is_reachable(self) -> bool:
        """클러스터 ping 응답 여부."""
        return check_connection(self.client)

    def index_exists(self) -> bool:
        return bool(self.client.indices.exists(index=self.index_name))

    def create_index(self, *, warm: bool = True) -> None:
        """컴파일된 settings/mappings로 인덱스 생성 후 워머 실행."""
        self.client.indices.create(index=self.index_name, **self._index_params.body())
        logger.info(f"Created index '{self.index_name}'")
        if warm:
            self.warm_up()

    def drop_index(self) -> None:
        """인덱스 삭제. 없으면 아무것도 하지 않음."""
        if self.index_exists():
            self.client.indices.delete(index=self.index_name)
            logger.info(f"Dropped index '{self.index_name}'")

    def drop_and_create_index(self) -> None:
        self.drop_index()
        self.create_index()

    def update_settings(self, body: Mapping[str, Any]) -> None:
        """인덱스 파라미터에 settings/mappings를 deep merge.

        다음 create_index부터 반영됩니다.

        Example:
            >>> connection.update_settings({"mappings": {"properties": {"tag": {"type": "keyword"}}}})
        """
        params = self._index_params
        settings = params.settings
        mappings = params.mappings
        if body.get("settings"):
            settings = deep_merge(settings or {}, body["settings"])
        if body.get("mappings"):
            mappings = deep_merge(mappings or {}, body["mappings"])
        self._index_params = replace(params, settings=settings, mappings=mappings)

    def refresh(self) -> None:
        self.client.indices.refresh(index=self.index_name)

    def flush(self) -> None:
        self.client.indices.flush(index=self.index_name)

    def clear_cache(self) -> None:
        """인덱스 캐시 비우기."""
        self.client.indices.clear_cache(index=self.index_name)
        logger.info(f"Cleared cache of index '{self.index_name}'")

    def get_version_number(self) -> str:
        """클러스터 버전 문자열 (예: "8.13.0")."""
        return str(self.client.info()["version"]["number"])

    def get_index_info(self) -> IndexInfo:
        """인덱스 정보 조회."""
        if not self.index_exists():
            return IndexInfo(name=self.index_name, exists=False)

        stats = self.client.indices.stats(index=self.index_name)
        index_stats = stats["indices"].get(self.index_name, {}).get("primaries", {})
        return IndexInfo(
            name=self.index_name,
            exists=True,
            doc_count=index_stats.get("docs", {}).get("count", 0),
            size_bytes=index_stats.get("store", {}).get("size_in_bytes", 0),
        )

    # =========================================================================
    # Bulk
    # =========================================================================

    def bulk(self, operation: str, document: Mapping[str, Any]) -> None:
        """bulk 액션을 버퍼에 추가. commit()에서 전송.

        document의 `_id` 키는 문서 ID로 분리됩니다.
        """
        if operation not in BULK_OPERATIONS:
            raise ValueError(f"Unsupported bulk operation '{operation}'")

        source = dict(document)
        doc_id = source.pop("_id", None)
        action: dict[str, Any] = {"_op_type": operation, "_index": self.index_name}
        if doc_id is not None:
            action["_id"] = str(doc_id)
        elif operation in ("update", "delete"):
            raise ValueError(f"Bulk '{operation}' requires an '_id'")

        if operation == "update":
            action["doc"] = source
        elif operation != "delete":
            action["_source"] = source

        self._bulk_actions.append(action)

    @property
    def pending(self) -> int:
        return len(self._bulk_actions)

    def commit(self, refresh: bool = True) -> int:
        """버퍼된 bulk 액션 전송. 성공 건수 반환."""
        if not self._bulk_actions:
            return 0
        actions, self._bulk_actions = self._bulk_actions, []
        ok, _ = bulk(self.client, actions, refresh="wait_for" if refresh else False)
        return int(ok)
