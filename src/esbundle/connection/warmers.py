"""워머 레지스트리와 바인더.

워머는 `connection` 태그로 적용할 커넥션을 선언합니다.
태그 값은 커넥션 이름 하나 또는 콤마로 구분한 이름 집합입니다.

Usage:
    >>> registry = WarmerRegistry()
    >>> registry.register("catalog.warmer", CatalogWarmer(), connection="default,backup")
    >>> bind_warmers(connection, "default", registry)
    ['catalog.warmer']
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from esbundle.core.protocols import WarmerProtocol
from esbundle.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WarmerBinding:
    """등록된 워머와 태그."""

    id: str
    warmer: WarmerProtocol
    tags: dict[str, Any] = field(default_factory=dict)

    def applies_to(self, connection_name: str) -> bool:
        """이 워머가 주어진 커넥션에 붙는지 여부. connection 태그 없으면 False."""
        tag = self.tags.get("connection")
        if tag is None:
            return False
        tag = str(tag)
        if "," in tag:
            return connection_name in {name.strip() for name in tag.split(",")}
        return tag == connection_name


class WarmerRegistry:
    """등록 순서를 유지하는 워머 목록."""

    def __init__(self) -> None:
        self._bindings: dict[str, WarmerBinding] = {}

    def register(self, warmer_id: str, warmer: WarmerProtocol, **tags: Any) -> None:
        if warmer_id in self._bindings:
            raise ConfigurationError(f"Warmer '{warmer_id}' is already registered")
        self._bindings[warmer_id] = WarmerBinding(id=warmer_id, warmer=warmer, tags=tags)

    def __iter__(self) -> Iterator[WarmerBinding]:
        return iter(list(self._bindings.values()))

    def __len__(self) -> int:
        return len(self._bindings)


def bind_warmers(connection: Any, connection_name: str, registry: WarmerRegistry) -> list[str]:
    """커넥션 이름에 맞는 워머를 등록 순서대로 부착.

    Returns:
        부착된 워머 ID 목록
    """
    attached: list[str] = []
    for binding in registry:
        if binding.applies_to(connection_name):
            connection.add_warmer(binding.warmer)
            attached.append(binding.id)

    if attached:
        logger.debug(f"Attached warmers to connection '{connection_name}': {attached}")
    return attached
