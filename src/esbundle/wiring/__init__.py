"""설정 → Manager/Repository 객체 그래프 와이어링."""

from esbundle.wiring.bundle import ElasticsearchBundle
from esbundle.wiring.compiler import WiringResult, wire
from esbundle.wiring.registry import DEFAULT_MANAGER, KEY_PREFIX, ServiceRegistry

__all__ = [
    "ElasticsearchBundle",
    "ServiceRegistry",
    "WiringResult",
    "wire",
    "DEFAULT_MANAGER",
    "KEY_PREFIX",
]
