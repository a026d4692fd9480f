"""YAML 설정 로더

커넥션/매니저/모듈 선언을 YAML 파일 하나로 관리합니다.
환경변수(.env 포함)로 설정 파일 위치와 로그 경로를 지정할 수 있습니다.

Config 구조:
    logging_path: ./logs/elasticsearch.log
    strict_mappings: false
    host_modules: [catalog, blog]   # 생략 시 modules 섹션의 키 전체
    connections:
      default:
        hosts: [http://localhost:9200]
        index_name: shop
        auth: {username: elastic, password: changeme}
        settings: {number_of_shards: 1}
    managers:
      default:
        connection: default
        mappings: [catalog]
        debug: false
    modules:
      catalog:
        proxy_path: ./cache/proxies/catalog
        types:
          product:
            class: Product
            properties: {title: {type: text}}

환경변수:
    ES_BUNDLE_CONFIG: 설정 파일 경로 (기본: ./configs/elasticsearch.yaml)
    ES_LOGGING_PATH: debug 매니저 로그 파일 경로 (기본: ./logs/elasticsearch.log)
    ES_HOSTS: hosts를 선언하지 않은 커넥션의 기본 호스트 (콤마 구분)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from typing_extensions import Self

from esbundle.errors import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_PATH = "./configs/elasticsearch.yaml"
DEFAULT_LOGGING_PATH = "./logs/elasticsearch.log"
DEFAULT_HOSTS = ("http://localhost:9200",)


def _default_hosts() -> tuple[str, ...]:
    raw = os.getenv("ES_HOSTS")
    if not raw:
        return DEFAULT_HOSTS
    return tuple(h.strip() for h in raw.split(",") if h.strip())


def _default_logging_path() -> Path:
    return Path(os.getenv("ES_LOGGING_PATH", DEFAULT_LOGGING_PATH))


def _load_yaml_config(config_path: str | Path) -> dict[str, Any]:
    """YAML 설정 파일 로드"""
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_path}")
    return data


def _as_list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigurationError(f"{what} must be a list, got {type(value).__name__}")


@dataclass(frozen=True)
class ConnectionSettings:
    """ES 커넥션 선언.

    Attributes:
        name: 커넥션 이름 (고유)
        index_name: 대상 인덱스명
        hosts: 호스트 목록 (순서 유지)
        auth: 인증 정보 (선언 순서 유지, 예: {"username": ..., "password": ...})
        settings: 인덱스 settings 원본 블록
    """

    name: str
    index_name: str
    hosts: tuple[str, ...] = field(default_factory=_default_hosts)
    auth: dict[str, str] | None = None
    settings: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> Self:
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Connection '{name}' must be a mapping, got {type(data).__name__}"
            )
        if "index_name" not in data:
            raise ConfigurationError(f"Connection '{name}' must declare index_name")

        auth = data.get("auth")
        if auth is not None and not isinstance(auth, Mapping):
            raise ConfigurationError(f"Connection '{name}' auth must be a mapping")

        settings = data.get("settings")
        if settings is not None and not isinstance(settings, Mapping):
            raise ConfigurationError(f"Connection '{name}' settings must be a mapping")

        hosts = _as_list(data.get("hosts"), f"connections.{name}.hosts")
        kwargs: dict[str, Any] = {}
        if hosts:
            kwargs["hosts"] = tuple(str(h) for h in hosts)

        return cls(
            name=name,
            index_name=str(data["index_name"]),
            auth=dict(auth) if auth else None,
            settings=dict(settings) if settings else None,
            **kwargs,
        )


@dataclass(frozen=True)
class ManagerSettings:
    """매니저 선언.

    Attributes:
        name: 매니저 이름 (대소문자 무시, 소문자화 후 고유)
        connection: 참조할 커넥션 이름
        mappings: 매핑할 모듈 목록 (선언 순서)
        debug: 클라이언트 로깅 활성화 여부
    """

    name: str
    connection: str = "default"
    mappings: tuple[str, ...] = ()
    debug: bool = False

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any] | None) -> Self:
        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Manager '{name}' must be a mapping, got {type(data).__name__}"
            )
        return cls(
            name=name,
            connection=str(data.get("connection", "default")),
            mappings=tuple(str(m) for m in _as_list(data.get("mappings"), f"managers.{name}.mappings")),
            debug=bool(data.get("debug", False)),
        )


def check_unique_manager_names(names: list[str]) -> None:
    """소문자화 후 이름이 겹치면 ConfigurationError."""
    seen: dict[str, str] = {}
    for name in names:
        lowered = name.lower()
        if lowered in seen:
            raise ConfigurationError(
                f"Manager names '{seen[lowered]}' and '{name}' collide (names are case-insensitive)"
            )
        seen[lowered] = name


@dataclass(frozen=True)
class BundleConfig:
    """esbundle 전체 설정.

    ConfigStoreProtocol 구현체입니다.
    """

    connections: dict[str, ConnectionSettings] = field(default_factory=dict)
    managers: dict[str, ManagerSettings] = field(default_factory=dict)
    modules: dict[str, Any] = field(default_factory=dict)
    host_modules: tuple[str, ...] = ()
    logging_path: Path = field(default_factory=_default_logging_path)
    strict_mappings: bool = False

    def get_managers(self) -> dict[str, ManagerSettings]:
        return self.managers

    def get_connections(self) -> dict[str, ConnectionSettings]:
        return self.connections

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """dict(YAML 로드 결과)에서 Config 생성"""
        connections_raw = data.get("connections") or {}
        managers_raw = data.get("managers") or {}
        modules_raw = data.get("modules") or {}

        for section, raw in (
            ("connections", connections_raw),
            ("managers", managers_raw),
            ("modules", modules_raw),
        ):
            if not isinstance(raw, Mapping):
                raise ConfigurationError(f"'{section}' section must be a mapping")

        check_unique_manager_names(list(managers_raw))

        connections = {
            name: ConnectionSettings.from_dict(name, raw or {})
            for name, raw in connections_raw.items()
        }
        managers = {name: ManagerSettings.from_dict(name, raw) for name, raw in managers_raw.items()}

        host_modules = data.get("host_modules")
        if host_modules is None:
            host_modules = list(modules_raw)

        kwargs: dict[str, Any] = {}
        if data.get("logging_path"):
            kwargs["logging_path"] = Path(data["logging_path"])

        return cls(
            connections=connections,
            managers=managers,
            modules=dict(modules_raw),
            host_modules=tuple(_as_list(host_modules, "host_modules")),
            strict_mappings=bool(data.get("strict_mappings", False)),
            **kwargs,
        )

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """YAML 파일에서 Config 생성"""
        return cls.from_dict(_load_yaml_config(config_path))

    @classmethod
    def from_env(cls) -> Self:
        """ES_BUNDLE_CONFIG 환경변수가 가리키는 파일에서 Config 생성"""
        return cls.from_yaml(os.getenv("ES_BUNDLE_CONFIG", DEFAULT_CONFIG_PATH))
