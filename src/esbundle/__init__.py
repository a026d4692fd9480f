"""Elasticsearch 매니저/리포지토리 와이어링.

정적 설정(커넥션, 모듈 매핑, 워머)을 매니저별로 컴파일해
Connection / Manager / Repository 객체 그래프를 만듭니다.

주요 컴포넌트:
    - BundleConfig: YAML/환경변수 설정
    - MetadataCollector: 모듈별 타입 매핑 수집
    - compile_manager_metadata / compile_index_body: 매핑 컴파일
    - build_connection: 클라이언트/인덱스 파라미터 해석
    - bind_warmers: 커넥션 태그 기반 워머 부착
    - wire / ElasticsearchBundle: 레지스트리 와이어링

Usage:
    >>> from esbundle import ElasticsearchBundle
    >>>
    >>> bundle = ElasticsearchBundle.from_yaml("configs/elasticsearch.yaml")
    >>> registry = bundle.boot()
    >>> manager = registry.manager()              # manager (= manager.default)
    >>> repo = registry.get("manager.shop.product")
"""

from esbundle.config import BundleConfig, ConnectionSettings, ManagerSettings
from esbundle.connection import (
    Connection,
    WarmerRegistry,
    bind_warmers,
    build_connection,
    create_es_client,
)
from esbundle.core import ClientParams, CompiledIndexParams, ProxyPaths, TypeMappingRecord
from esbundle.errors import (
    ConfigurationError,
    ConnectionNotFoundError,
    ESBundleError,
    MalformedMappingError,
    UnknownModuleError,
    WiringError,
)
from esbundle.mapping import (
    MetadataCollector,
    compile_index_body,
    compile_manager_metadata,
    deep_merge,
)
from esbundle.orm import ClassMetadataCollection, Manager, Repository
from esbundle.wiring import ElasticsearchBundle, ServiceRegistry, WiringResult, wire

__all__ = [
    # Config
    "BundleConfig",
    "ConnectionSettings",
    "ManagerSettings",
    # Types
    "TypeMappingRecord",
    "CompiledIndexParams",
    "ClientParams",
    "ProxyPaths",
    # Mapping
    "MetadataCollector",
    "compile_manager_metadata",
    "compile_index_body",
    "deep_merge",
    # Connection
    "Connection",
    "build_connection",
    "create_es_client",
    "WarmerRegistry",
    "bind_warmers",
    # ORM
    "ClassMetadataCollection",
    "Manager",
    "Repository",
    # Wiring
    "ElasticsearchBundle",
    "ServiceRegistry",
    "WiringResult",
    "wire",
    # Errors
    "ESBundleError",
    "ConfigurationError",
    "UnknownModuleError",
    "MalformedMappingError",
    "WiringError",
    "ConnectionNotFoundError",
]
