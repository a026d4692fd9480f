"""설정 기반 메타데이터 수집기.

`modules` 설정 섹션에서 모듈별 타입 매핑과 인덱스 매핑을 제공합니다.
MetadataCollectorProtocol 구현체입니다.

모듈 선언 형식:
    catalog:
      proxy_path: ./cache/proxies/catalog   # 선택
      mapping: {dynamic: strict}            # 선택, 모듈 인덱스 매핑에 덮어씀
      types:
        product:
          class: Product
          properties:
            title: {type: text}
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from esbundle.errors import MalformedMappingError, UnknownModuleError
from esbundle.mapping.merge import deep_merge

logger = logging.getLogger(__name__)


class MetadataCollector:
    """모듈 선언에서 타입/인덱스 매핑을 수집."""

    def __init__(self, modules: Mapping[str, Any] | None = None):
        self._modules: dict[str, dict[str, Any]] = {}
        self._proxy_paths: list[str] = []
        for name, declaration in (modules or {}).items():
            self.add_module(name, declaration or {})

    def add_module(self, name: str, declaration: Mapping[str, Any]) -> None:
        """모듈 선언 등록. 같은 이름이면 덮어씀."""
        if not isinstance(declaration, Mapping):
            raise MalformedMappingError(f"Module '{name}' declaration must be a mapping")
        types = declaration.get("types") or {}
        if not isinstance(types, Mapping):
            raise MalformedMappingError(f"Module '{name}' types must be a mapping")
        mapping = declaration.get("mapping") or {}
        if not isinstance(mapping, Mapping):
            raise MalformedMappingError(f"Module '{name}' mapping must be a mapping")
        self._modules[name] = dict(declaration)

    @property
    def modules(self) -> list[str]:
        return list(self._modules)

    def _get(self, module: str) -> dict[str, Any]:
        try:
            declaration = self._modules[module]
        except KeyError:
            raise UnknownModuleError(module) from None

        proxy_path = declaration.get("proxy_path")
        if proxy_path:
            proxy_path = str(proxy_path)
            if proxy_path not in self._proxy_paths:
                self._proxy_paths.append(proxy_path)
        return declaration

    def get_module_mapping(self, module: str) -> dict[str, dict[str, Any]]:
        """{type_name: params} 반환. params는 복사본."""
        types = self._get(module).get("types") or {}
        out: dict[str, dict[str, Any]] = {}
        for type_name, params in types.items():
            if not isinstance(params, Mapping):
                raise MalformedMappingError(
                    f"Type '{type_name}' in module '{module}' must be a mapping"
                )
            out[type_name] = copy.deepcopy(dict(params))
        return out

    def get_index_mapping(self, module: str) -> dict[str, Any]:
        """모듈이 인덱스에 기여하는 매핑 본문."""
        declaration = self._get(module)
        body: dict[str, Any] = {}
        for type_name, params in self.get_module_mapping(module).items():
            properties = params.get("properties")
            if properties is None:
                continue
            if not isinstance(properties, Mapping):
                raise MalformedMappingError(
                    f"Properties of type '{type_name}' in module '{module}' must be a mapping"
                )
            body = deep_merge(body, {"properties": properties})

        if declaration.get("mapping"):
            body = deep_merge(body, declaration["mapping"])

        logger.debug(f"Collected index mapping for module '{module}': {sorted(body)}")
        return body

    def get_proxy_paths(self) -> list[str]:
        """지금까지 조회된 모듈들의 프록시 경로."""
        return list(self._proxy_paths)
