"""컴파일 단계에서 공용으로 쓰는 값 타입 정의.

이 모듈은 인프라에 의존하지 않습니다.
mapping, connection, wiring 등 어디서든 import할 수 있습니다.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

DEFAULT_LOG_LEVEL = "warning"


@dataclass(frozen=True)
class TypeMappingRecord:
    """모듈 하나에 속한 문서 클래스 하나의 매핑 선언.

    Attributes:
        module: 소유 모듈명
        type_name: ES 타입명
        class_name: 문서 클래스 식별자
        params: 임의의 매핑 파라미터 (class, properties 등)
    """

    module: str
    type_name: str
    class_name: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """`<module>:<class>` 형식의 고유 키."""
        return f"{self.module}:{self.class_name}"


@dataclass(frozen=True)
class CompiledIndexParams:
    """인덱스 생성 페이로드 (이름, 설정, 병합된 매핑)."""

    index: str
    settings: dict[str, Any] | None = None
    mappings: dict[str, Any] | None = None

    def body(self) -> dict[str, Any]:
        """indices.create에 넘길 body. 비어 있는 키는 생략."""
        out: dict[str, Any] = {}
        if self.settings:
            out["settings"] = copy.deepcopy(self.settings)
        if self.mappings:
            out["mappings"] = copy.deepcopy(self.mappings)
        return out

    def to_params(self) -> dict[str, Any]:
        """`{"index": ..., "body": {...}}` 형태. body가 비면 생략."""
        params: dict[str, Any] = {"index": self.index}
        body = self.body()
        if body:
            params["body"] = body
        return params


@dataclass(frozen=True)
class LoggingParams:
    """debug 매니저용 클라이언트 로깅 설정."""

    log_path: str
    trace: Any
    enabled: bool = True
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class ClientParams:
    """ES 클라이언트 생성 파라미터."""

    hosts: tuple[str, ...]
    auth: tuple[str, ...] | None = None
    logging: LoggingParams | None = None

    def to_dict(self) -> dict[str, Any]:
        params: dict[str, Any] = {"hosts": list(self.hosts)}
        if self.auth:
            params["auth"] = list(self.auth)
        if self.logging is not None:
            params["logging"] = self.logging.enabled
            params["log_path"] = self.logging.log_path
            params["log_level"] = self.logging.log_level
            params["trace"] = self.logging.trace
        return params


class ProxyPaths:
    """프록시 경로 누산기.

    컴파일 호출마다 명시적으로 주고받으며 합집합으로만 커집니다.
    최초 등장 순서를 유지하고 중복은 제거합니다.
    """

    def __init__(self, paths: Iterable[str] = ()):
        self._paths: dict[str, None] = dict.fromkeys(paths)

    def union(self, paths: Iterable[str]) -> ProxyPaths:
        """기존 경로와 새 경로의 합집합을 새 객체로 반환."""
        merged = ProxyPaths(self._paths)
        for path in paths:
            merged._paths.setdefault(path, None)
        return merged

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProxyPaths):
            return set(self._paths) == set(other._paths)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ProxyPaths({list(self._paths)!r})"
