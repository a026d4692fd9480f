"""매핑 컴파일러.

매니저 설정과 메타데이터 수집기로부터
    - 타입 메타데이터 컬렉션 (`<module>:<class>` -> TypeMappingRecord)
    - 인덱스 생성 파라미터 (이름, settings, 병합된 mappings)
를 만듭니다.

Usage:
    >>> records = compile_manager_metadata(manager, collector)
    >>> index, paths = compile_index_body(connection, manager, collector, host_modules=["catalog"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from esbundle.config import ConnectionSettings, ManagerSettings
from esbundle.core.protocols import MetadataCollectorProtocol
from esbundle.core.types import CompiledIndexParams, ProxyPaths, TypeMappingRecord
from esbundle.errors import ConfigurationError, MalformedMappingError
from esbundle.mapping.merge import merge_all

logger = logging.getLogger(__name__)


def compile_manager_metadata(
    manager: ManagerSettings,
    collector: MetadataCollectorProtocol,
) -> dict[str, TypeMappingRecord]:
    """매니저가 선언한 모듈들의 타입 매핑을 하나의 컬렉션으로 모음.

    Args:
        manager: 매니저 설정
        collector: 메타데이터 수집기

    Returns:
        선언 순서를 유지하는 {"<module>:<class>": TypeMappingRecord}

    Raises:
        UnknownModuleError: 수집기가 모르는 모듈인 경우
        MalformedMappingError: class 식별자가 없거나 params가 dict가 아닌 경우
    """
    out: dict[str, TypeMappingRecord] = {}
    for module in manager.mappings:
        for type_name, params in collector.get_module_mapping(module).items():
            if not isinstance(params, Mapping):
                raise MalformedMappingError(
                    f"Mapping for type '{type_name}' in module '{module}' must be a mapping"
                )
            class_name = params.get("class")
            if not class_name:
                raise MalformedMappingError(
                    f"Type '{type_name}' in module '{module}' has no class identifier"
                )
            stamped = dict(params)
            stamped["type"] = type_name
            record = TypeMappingRecord(
                module=module,
                type_name=type_name,
                class_name=str(class_name),
                params=stamped,
            )
            out[record.key] = record
    return out


def _mapping_modules(
    manager: ManagerSettings,
    host_modules: Sequence[str],
    strict: bool,
) -> Sequence[str]:
    if manager.mappings:
        return manager.mappings
    if strict:
        raise ConfigurationError(f"Manager '{manager.name}' must declare its mappings")
    # 모듈을 선언하지 않은 매니저는 호스트의 모든 모듈 매핑을 받음
    logger.warning(
        f"Manager '{manager.name}' declares no mappings, "
        f"falling back to all host modules: {list(host_modules)}"
    )
    return host_modules


def _index_mappings(
    modules: Sequence[str], collector: MetadataCollectorProtocol
) -> Iterator[Mapping[str, Any]]:
    for module in modules:
        body = collector.get_index_mapping(module)
        if not isinstance(body, Mapping):
            raise MalformedMappingError(f"Index mapping of module '{module}' must be a mapping")
        yield body


def compile_index_body(
    connection: ConnectionSettings,
    manager: ManagerSettings,
    collector: MetadataCollectorProtocol,
    *,
    host_modules: Sequence[str] = (),
    proxy_paths: ProxyPaths | None = None,
    strict: bool = False,
) -> tuple[CompiledIndexParams, ProxyPaths]:
    """커넥션 하나의 인덱스 생성 파라미터를 컴파일.

    Args:
        connection: 커넥션 설정 (인덱스명, settings 원본)
        manager: 매니저 설정
        collector: 메타데이터 수집기
        host_modules: 매니저가 모듈을 선언하지 않았을 때 사용할 전체 모듈 목록
        proxy_paths: 이전 컴파일에서 누적된 프록시 경로
        strict: True면 모듈 목록 없는 매니저를 거부

    Returns:
        (CompiledIndexParams, 누적된 ProxyPaths)
    """
    modules = _mapping_modules(manager, host_modules, strict)
    mappings = merge_all(_index_mappings(modules, collector))

    if proxy_paths is None:
        proxy_paths = ProxyPaths()
    paths = proxy_paths.union(collector.get_proxy_paths())

    index = CompiledIndexParams(
        index=connection.index_name,
        settings=dict(connection.settings) if connection.settings else None,
        mappings=mappings or None,
    )
    return index, paths
