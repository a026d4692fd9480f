"""커넥션 빌더.

매니저가 참조하는 커넥션 이름을 실제 클라이언트 생성 파라미터와
인덱스 생성 파라미터로 풀어냅니다. 부수 효과는 없습니다.

커넥션이 없으면 예외 대신 ConnectionMissing 결과를 돌려주고,
와이어링 단계가 이를 보고 중단합니다.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from esbundle.config import ConnectionSettings, ManagerSettings
from esbundle.core.protocols import MetadataCollectorProtocol
from esbundle.core.types import (
    DEFAULT_LOG_LEVEL,
    ClientParams,
    CompiledIndexParams,
    LoggingParams,
    ProxyPaths,
)
from esbundle.errors import ConfigurationError
from esbundle.mapping.compiler import compile_index_body


@dataclass(frozen=True)
class ConnectionPlan:
    """커넥션 해석 성공 결과."""

    manager: str
    connection_name: str
    client_params: ClientParams
    index_params: CompiledIndexParams
    proxy_paths: ProxyPaths


@dataclass(frozen=True)
class ConnectionMissing:
    """참조한 커넥션이 없음."""

    manager: str
    connection_name: str

    @property
    def message(self) -> str:
        return f"There is no ES connection with name '{self.connection_name}'"


ConnectionLookup = Union[ConnectionPlan, ConnectionMissing]


def build_client_params(
    connection: ConnectionSettings,
    manager: ManagerSettings,
    *,
    logging_path: str | Path,
    trace: Any = None,
) -> ClientParams:
    """클라이언트 생성 파라미터.

    hosts는 그대로 복사하고, auth는 (user, password) 위치 쌍으로 평탄화합니다.
    debug 매니저는 warning 레벨 로깅과 트레이스 기록기를 받습니다.
    """
    auth = None
    if connection.auth:
        auth = tuple(str(v) for v in connection.auth.values())
        if len(auth) != 2:
            raise ConfigurationError(
                f"Connection '{connection.name}' auth must be a (username, password) pair"
            )

    logging_params = None
    if manager.debug:
        logging_params = LoggingParams(
            log_path=str(logging_path),
            trace=trace,
            enabled=True,
            log_level=DEFAULT_LOG_LEVEL,
        )

    return ClientParams(hosts=tuple(connection.hosts), auth=auth, logging=logging_params)


def build_connection(
    connections: Mapping[str, ConnectionSettings],
    manager: ManagerSettings,
    collector: MetadataCollectorProtocol,
    *,
    logging_path: str | Path,
    trace: Any = None,
    host_modules: Sequence[str] = (),
    proxy_paths: ProxyPaths | None = None,
    strict: bool = False,
) -> ConnectionLookup:
    """매니저의 커넥션을 ClientParams + CompiledIndexParams로 해석.

    커넥션 조회가 가장 먼저 일어나며, 없으면 다른 작업 없이 ConnectionMissing을 반환합니다.
    """
    connection = connections.get(manager.connection)
    if connection is None:
        return ConnectionMissing(manager=manager.name, connection_name=manager.connection)

    client_params = build_client_params(
        connection, manager, logging_path=logging_path, trace=trace
    )
    index_params, paths = compile_index_body(
        connection,
        manager,
        collector,
        host_modules=host_modules,
        proxy_paths=proxy_paths,
        strict=strict,
    )
    return ConnectionPlan(
        manager=manager.name,
        connection_name=manager.connection,
        client_params=client_params,
        index_params=index_params,
        proxy_paths=paths,
    )
