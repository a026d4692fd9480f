"""매니저/리포지토리 레지스트리.

타입이 있는 조회(매니저 이름, (매니저, 클래스) 쌍)를 기본으로 하고,
호환용으로 `manager.<name>` / `manager.<name>.<class>` 문자열 키 조회도 제공합니다.
"""

from __future__ import annotations

from collections.abc import Mapping

from esbundle.errors import ConnectionNotFoundError
from esbundle.orm.manager import Manager
from esbundle.orm.repository import Repository

KEY_PREFIX = "manager"
DEFAULT_MANAGER = "default"


class ServiceRegistry:
    """와이어링 결과. 생성 후에는 읽기 전용."""

    def __init__(
        self,
        managers: Mapping[str, Manager],
        repositories: Mapping[tuple[str, str], Repository],
    ):
        self._managers = dict(managers)
        self._repositories = dict(repositories)

    @property
    def managers(self) -> dict[str, Manager]:
        return dict(self._managers)

    @property
    def repositories(self) -> dict[tuple[str, str], Repository]:
        return dict(self._repositories)

    @property
    def default(self) -> Manager | None:
        """`default` 매니저 (별칭 `manager`). 없으면 None."""
        return self._managers.get(DEFAULT_MANAGER)

    def has_manager(self, name: str) -> bool:
        return name.lower() in self._managers

    def manager(self, name: str = DEFAULT_MANAGER) -> Manager:
        try:
            return self._managers[name.lower()]
        except KeyError:
            raise ConnectionNotFoundError(name) from None

    def repository(self, manager: str, class_name: str) -> Repository:
        try:
            return self._repositories[(manager.lower(), class_name.lower())]
        except KeyError:
            raise KeyError(f"No repository for class '{class_name}' in manager '{manager}'") from None

    # =========================================================================
    # 문자열 키 호환 조회
    # =========================================================================

    def keys(self) -> list[str]:
        out = []
        for name in self._managers:
            out.append(f"{KEY_PREFIX}.{name}")
            if name == DEFAULT_MANAGER:
                out.append(KEY_PREFIX)
        out.extend(f"{KEY_PREFIX}.{m}.{c}" for m, c in self._repositories)
        return out

    def get(self, key: str) -> Manager | Repository:
        """`manager`, `manager.<name>`, `manager.<name>.<class>` 키로 조회."""
        parts = key.lower().split(".")
        if parts[0] != KEY_PREFIX or len(parts) > 3:
            raise KeyError(key)
        if len(parts) == 1:
            if self.default is None:
                raise KeyError(key)
            return self.default
        if len(parts) == 2:
            if parts[1] not in self._managers:
                raise KeyError(key)
            return self._managers[parts[1]]
        try:
            return self._repositories[(parts[1], parts[2])]
        except KeyError:
            raise KeyError(key) from None

    def has(self, key: str) -> bool:
        try:
            self.get(key)
        except KeyError:
            return False
        return True

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)
