"""커넥션 계층.

주요 컴포넌트:
    - build_connection: 커넥션 설정 -> ClientParams + CompiledIndexParams
    - create_es_client: ClientParams -> Elasticsearch
    - Connection: 클라이언트 + 인덱스 파라미터 + 워머
    - WarmerRegistry / bind_warmers: 커넥션 태그 기반 워머 부착
"""

from esbundle.connection.builder import (
    ConnectionLookup,
    ConnectionMissing,
    ConnectionPlan,
    build_client_params,
    build_connection,
)
from esbundle.connection.client import check_connection, create_es_client
from esbundle.connection.connection import Connection, IndexInfo
from esbundle.connection.trace import TraceRecorder
from esbundle.connection.warmers import WarmerBinding, WarmerRegistry, bind_warmers

__all__ = [
    # Builder
    "ConnectionPlan",
    "ConnectionMissing",
    "ConnectionLookup",
    "build_client_params",
    "build_connection",
    # Client
    "create_es_client",
    "check_connection",
    "TraceRecorder",
    # Connection
    "Connection",
    "IndexInfo",
    # Warmers
    "WarmerBinding",
    "WarmerRegistry",
    "bind_warmers",
]
