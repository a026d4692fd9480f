"""매니저/리포지토리 와이어링.

설정 → 메타데이터 수집 → 매핑 컴파일 → 커넥션 빌드 → 워머 바인딩 →
Manager/Repository 객체 그래프 순서로 한 방향으로 흐릅니다.

매니저 하나라도 실패하면 WiringError로 전체가 중단되고,
부분적으로 만들어진 레지스트리는 반환되지 않습니다.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from esbundle.config import (
    DEFAULT_LOGGING_PATH,
    ConnectionSettings,
    ManagerSettings,
    check_unique_manager_names,
)
from esbundle.connection.builder import ConnectionMissing, build_connection
from esbundle.connection.client import create_es_client
from esbundle.connection.connection import Connection
from esbundle.connection.warmers import WarmerRegistry, bind_warmers
from esbundle.core.protocols import ClientFactoryProtocol, MetadataCollectorProtocol
from esbundle.core.types import ProxyPaths
from esbundle.errors import ConfigurationError, WiringError
from esbundle.mapping.compiler import compile_manager_metadata
from esbundle.orm.manager import Manager
from esbundle.orm.metadata import ClassMetadataCollection
from esbundle.orm.repository import Repository
from esbundle.wiring.registry import ServiceRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WiringResult:
    """와이어링 결과 (레지스트리 + 누적 프록시 경로)."""

    registry: ServiceRegistry
    proxy_paths: ProxyPaths


def wire(
    managers: Mapping[str, ManagerSettings],
    connections: Mapping[str, ConnectionSettings],
    collector: MetadataCollectorProtocol,
    *,
    client_factory: ClientFactoryProtocol = create_es_client,
    warmers: WarmerRegistry | None = None,
    host_modules: Sequence[str] = (),
    logging_path: str | Path = DEFAULT_LOGGING_PATH,
    trace: Any = None,
    proxy_paths: ProxyPaths | None = None,
    strict: bool = False,
) -> WiringResult:
    """모든 매니저를 선언 순서대로 와이어링.

    Args:
        managers: {이름: ManagerSettings}
        connections: {이름: ConnectionSettings}
        collector: 메타데이터 수집기
        client_factory: ClientParams -> 클라이언트
        warmers: 워머 레지스트리
        host_modules: 모듈을 선언하지 않은 매니저용 전체 모듈 목록
        logging_path: debug 매니저 로그 파일 경로
        trace: debug 매니저 트레이스 기록기
        proxy_paths: 이전 컴파일에서 누적된 프록시 경로
        strict: True면 모듈 목록 없는 매니저를 거부

    Returns:
        WiringResult

    Raises:
        ConfigurationError: 대소문자만 다른 매니저 이름이 있는 경우
        WiringError: 매니저 하나라도 설정 오류가 있는 경우
    """
    settings_list = list(managers.values())
    check_unique_manager_names([s.name for s in settings_list])

    warmers = warmers if warmers is not None else WarmerRegistry()
    paths = proxy_paths if proxy_paths is not None else ProxyPaths()
    built_managers: dict[str, Manager] = {}
    built_repositories: dict[tuple[str, str], Repository] = {}

    for settings in settings_list:
        try:
            lookup = build_connection(
                connections,
                settings,
                collector,
                logging_path=logging_path,
                trace=trace,
                host_modules=host_modules,
                proxy_paths=paths,
                strict=strict,
            )
            if isinstance(lookup, ConnectionMissing):
                raise WiringError(settings.name, lookup.message)
            records = compile_manager_metadata(settings, collector)
        except WiringError:
            raise
        except ConfigurationError as e:
            raise WiringError(settings.name, str(e)) from e

        paths = lookup.proxy_paths
        connection = Connection(client_factory(lookup.client_params), lookup.index_params)
        bind_warmers(connection, lookup.connection_name, warmers)

        manager = Manager(connection, ClassMetadataCollection(records))
        name = settings.key
        built_managers[name] = manager

        for record in records.values():
            repo_key = (name, record.class_name.lower())
            if repo_key in built_repositories:
                logger.warning(
                    f"Repository 'manager.{name}.{repo_key[1]}' is declared by several modules, "
                    f"using '{record.key}'"
                )
            built_repositories[repo_key] = Repository(manager, [record.key])

        logger.info(
            f"Wired manager '{name}' -> connection '{lookup.connection_name}' "
            f"(index '{lookup.index_params.index}', {len(records)} types)"
        )

    return WiringResult(
        registry=ServiceRegistry(built_managers, built_repositories),
        proxy_paths=paths,
    )
