"""매니저 하나의 타입 메타데이터 컬렉션."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from esbundle.core.types import TypeMappingRecord


class ClassMetadataCollection:
    """`<module>:<class>` 키로 TypeMappingRecord를 보관."""

    def __init__(self, records: Mapping[str, TypeMappingRecord]):
        self._records = dict(records)

    def __getitem__(self, key: str) -> TypeMappingRecord:
        return self._records[key]

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def keys(self) -> list[str]:
        return list(self._records)

    def records(self) -> list[TypeMappingRecord]:
        return list(self._records.values())

    def find_by_class(self, class_name: str) -> list[TypeMappingRecord]:
        """클래스명(대소문자 무시)으로 레코드 검색. 모듈이 달라도 모두 반환."""
        lowered = class_name.lower()
        return [r for r in self._records.values() if r.class_name.lower() == lowered]

    def resolve(self, name: str) -> TypeMappingRecord:
        """`<module>:<class>` 키 또는 고유한 클래스명으로 레코드 조회."""
        if name in self._records:
            return self._records[name]
        matches = self.find_by_class(name)
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise KeyError(f"No mapping for '{name}'")
        raise KeyError(f"Class '{name}' is ambiguous: {[r.key for r in matches]}")
