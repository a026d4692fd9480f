"""Manager: 커넥션 하나와 컴파일된 타입 메타데이터를 묶는 집합 루트."""

from __future__ import annotations

from esbundle.connection.connection import Connection
from esbundle.orm.metadata import ClassMetadataCollection
from esbundle.orm.repository import Repository


class Manager:
    """이름 붙은 인덱스 그룹의 커넥션 + 메타데이터."""

    def __init__(self, connection: Connection, metadata: ClassMetadataCollection):
        self.connection = connection
        self.metadata = metadata

    def get_connection(self) -> Connection:
        return self.connection

    def get_repository(self, name: str) -> Repository:
        """`<module>:<class>` 키 또는 클래스명으로 리포지토리 생성."""
        record = self.metadata.resolve(name)
        return Repository(self, [record.key])

    def commit(self, refresh: bool = True) -> int:
        """버퍼된 bulk 액션 전송."""
        return self.connection.commit(refresh=refresh)

    def refresh(self) -> None:
        self.connection.refresh()

    def flush(self) -> None:
        self.connection.flush()
