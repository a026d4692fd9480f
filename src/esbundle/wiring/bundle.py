"""ElasticsearchBundle: 설정에서 레지스트리까지 한 번만 부팅.

Usage:
    >>> bundle = ElasticsearchBundle.from_yaml("configs/elasticsearch.yaml")
    >>> registry = bundle.boot()
    >>> registry.manager("default").get_connection().index_name
    >>> registry.get("manager.shop.product")
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from typing_extensions import Self

from esbundle.config import BundleConfig
from esbundle.connection.client import create_es_client
from esbundle.connection.trace import TraceRecorder
from esbundle.connection.warmers import WarmerRegistry
from esbundle.core.protocols import ClientFactoryProtocol, MetadataCollectorProtocol
from esbundle.core.types import ProxyPaths
from esbundle.mapping.collector import MetadataCollector
from esbundle.wiring.compiler import wire
from esbundle.wiring.registry import ServiceRegistry

logger = logging.getLogger(__name__)


class ElasticsearchBundle:
    """설정 + 협력자 묶음. boot()는 인스턴스당 최대 한 번 와이어링합니다."""

    def __init__(
        self,
        config: BundleConfig,
        *,
        collector: MetadataCollectorProtocol | None = None,
        client_factory: ClientFactoryProtocol = create_es_client,
        warmers: WarmerRegistry | None = None,
        proxy_paths: ProxyPaths | None = None,
    ):
        self.config = config
        self.collector = collector or MetadataCollector(config.modules)
        self.client_factory = client_factory
        self.warmers = warmers if warmers is not None else WarmerRegistry()
        self.trace = TraceRecorder()
        self.proxy_paths = proxy_paths if proxy_paths is not None else ProxyPaths()
        self._registry: ServiceRegistry | None = None
        self._boot_lock = threading.Lock()

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> Self:
        return cls(BundleConfig.from_yaml(config_path), **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> Self:
        return cls(BundleConfig.from_env(), **kwargs)

    @property
    def booted(self) -> bool:
        return self._registry is not None

    def boot(self) -> ServiceRegistry:
        """와이어링 실행 (최초 1회). 이후 호출은 같은 레지스트리 반환."""
        with self._boot_lock:
            if self._registry is not None:
                return self._registry

            result = wire(
                self.config.get_managers(),
                self.config.get_connections(),
                self.collector,
                client_factory=self.client_factory,
                warmers=self.warmers,
                host_modules=self.config.host_modules,
                logging_path=self.config.logging_path,
                trace=self.trace,
                proxy_paths=self.proxy_paths,
                strict=self.config.strict_mappings,
            )
            self.proxy_paths = result.proxy_paths
            self._registry = result.registry
            logger.info(f"Booted {len(result.registry.managers)} managers")
            return self._registry

    @property
    def registry(self) -> ServiceRegistry:
        return self.boot()
