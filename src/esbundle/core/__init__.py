"""공용 타입과 Protocol.

인프라(elasticsearch 등)에 의존하지 않습니다.
"""

from esbundle.core.protocols import (
    ClientFactoryProtocol,
    ConfigStoreProtocol,
    MetadataCollectorProtocol,
    WarmerProtocol,
)
from esbundle.core.types import (
    DEFAULT_LOG_LEVEL,
    ClientParams,
    CompiledIndexParams,
    LoggingParams,
    ProxyPaths,
    TypeMappingRecord,
)

__all__ = [
    # Types
    "TypeMappingRecord",
    "CompiledIndexParams",
    "ClientParams",
    "LoggingParams",
    "ProxyPaths",
    "DEFAULT_LOG_LEVEL",
    # Protocols
    "ConfigStoreProtocol",
    "MetadataCollectorProtocol",
    "ClientFactoryProtocol",
    "WarmerProtocol",
]
