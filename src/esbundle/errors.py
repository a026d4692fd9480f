"""esbundle 예외 정의.

설정 단계(컴파일/와이어링)에서 발생하는 오류는 모두 ConfigurationError 계열이며
즉시 실패합니다. 런타임 조회 실패(CLI, 테스트 스캐폴딩)는 RuntimeError 계열입니다.
"""

from __future__ import annotations


class ESBundleError(Exception):
    """esbundle 최상위 예외."""


class ConfigurationError(ESBundleError, ValueError):
    """잘못된 정적 설정 (치명적)."""


class UnknownModuleError(ConfigurationError):
    """메타데이터 수집기가 모르는 모듈을 참조한 경우."""

    def __init__(self, module: str):
        super().__init__(f"Unknown mapping module '{module}'")
        self.module = module


class MalformedMappingError(ConfigurationError):
    """매핑 본문 형식이 잘못된 경우."""


class WiringError(ConfigurationError):
    """매니저 와이어링 중 발생한 설정 오류.

    하나라도 발생하면 전체 컴파일이 중단되고 레지스트리는 커밋되지 않습니다.
    """

    def __init__(self, manager: str, reason: str):
        super().__init__(f"Failed to wire manager '{manager}': {reason}")
        self.manager = manager
        self.reason = reason


class ConnectionNotFoundError(ESBundleError, RuntimeError):
    """런타임에 존재하지 않는 커넥션/매니저를 조회한 경우."""

    def __init__(self, name: str):
        super().__init__(f"There is no ES connection with name '{name}'")
        self.name = name
