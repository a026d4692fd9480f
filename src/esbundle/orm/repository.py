"""타입별 리포지토리.

매니저의 커넥션을 공유하며, 매핑된 클래스 하나에 스코프됩니다.
문서는 raw dict로 다룹니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from elasticsearch import NotFoundError

if TYPE_CHECKING:
    from esbundle.orm.manager import Manager


class Repository:
    """매니저 참조(소유 아님) + 클래스 키."""

    def __init__(self, manager: Manager, keys: list[str]):
        self.manager = manager
        self.keys = list(keys)

    @property
    def types(self) -> list[str]:
        """스코프된 ES 타입명 목록."""
        return [self.manager.metadata[key].type_name for key in self.keys]

    @property
    def index_name(self) -> str:
        return self.manager.connection.index_name

    @property
    def es(self) -> Any:
        return self.manager.connection.client

    def upsert(self, document: dict[str, Any], refresh: bool = False) -> None:
        """단일 문서 upsert. `_id`가 있으면 문서 ID로 사용."""
        source = dict(document)
        doc_id = source.pop("_id", None)
        self.es.index(
            index=self.index_name,
            id=doc_id,
            document=source,
            refresh="wait_for" if refresh else False,
        )

    def bulk_upsert(self, documents: Iterable[dict[str, Any]], refresh: bool = False) -> int:
        """커넥션 bulk 버퍼에 쌓은 뒤 커밋. 성공 건수 반환."""
        connection = self.manager.connection
        for document in documents:
            connection.bulk("index", document)
        return connection.commit(refresh=refresh)

    def get(self, doc_id: str) -> dict[str, Any] | None:
        """ID로 단일 문서 조회."""
        try:
            resp = self.es.get(index=self.index_name, id=doc_id)
        except NotFoundError:
            return None
        return resp["_source"]

    def mget(self, doc_ids: list[str]) -> dict[str, dict[str, Any]]:
        """여러 ID로 문서 조회. {id: source} 형태 반환."""
        if not doc_ids:
            return {}
        resp = self.es.mget(index=self.index_name, ids=doc_ids)
        out: dict[str, dict[str, Any]] = {}
        for d in resp.get("docs", []):
            if d.get("found"):
                out[d["_id"]] = d["_source"]
        return out

    def delete(self, doc_id: str, refresh: bool = False) -> None:
        """문서 삭제."""
        self.es.delete(
            index=self.index_name,
            id=doc_id,
            refresh="wait_for" if refresh else False,
        )

    def count(self) -> int:
        """인덱스 내 총 문서 수."""
        resp = self.es.count(index=self.index_name)
        return int(resp["count"])
