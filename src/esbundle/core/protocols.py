"""외부 협력자 Protocol(인터페이스) 정의.

이 모듈은 인프라에 의존하지 않습니다.

Protocol은 구조적 서브타이핑(Structural Subtyping)을 지원합니다.
구현체가 이 Protocol을 상속하지 않아도, 시그니처만 맞으면 호환됩니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from esbundle.config import ConnectionSettings, ManagerSettings
    from esbundle.core.types import ClientParams


class ConfigStoreProtocol(Protocol):
    """정적 설정 저장소 인터페이스."""

    def get_managers(self) -> Mapping[str, ManagerSettings]: ...

    def get_connections(self) -> Mapping[str, ConnectionSettings]: ...


class MetadataCollectorProtocol(Protocol):
    """모듈별 타입 메타데이터 수집기 인터페이스.

    Example:
        >>> class AnnotationCollector:
        ...     def get_module_mapping(self, module: str) -> dict[str, dict[str, Any]]:
        ...         ...  # {"product": {"class": "Product", "properties": {...}}}
        ...     def get_index_mapping(self, module: str) -> dict[str, Any]:
        ...         ...  # {"properties": {...}}
        ...     def get_proxy_paths(self) -> list[str]:
        ...         ...
    """

    def get_module_mapping(self, module: str) -> Mapping[str, Mapping[str, Any]]: ...

    def get_index_mapping(self, module: str) -> Mapping[str, Any]: ...

    def get_proxy_paths(self) -> list[str]: ...


class ClientFactoryProtocol(Protocol):
    """ClientParams를 받아 불투명한 클라이언트 핸들을 반환."""

    def __call__(self, params: ClientParams) -> Any: ...


class WarmerProtocol(Protocol):
    """커넥션 생성 후 인덱스 상태를 예열하는 훅."""

    def warm(self, connection: Any) -> None: ...
