"""Elasticsearch 클라이언트 팩토리.

컴파일된 ClientParams로 클라이언트를 생성합니다.
debug 매니저는 트랜스포트 로거에 파일 핸들러와 트레이스 기록기가 연결됩니다.
"""

from __future__ import annotations

import logging
from pathlib import Path

from elasticsearch import ApiError, Elasticsearch, TransportError

from esbundle.core.types import ClientParams, LoggingParams

logger = logging.getLogger(__name__)

CLIENT_LOGGERS = ("elasticsearch", "elastic_transport")


def _configure_logging(params: LoggingParams) -> None:
    """클라이언트 로거에 파일 핸들러와 트레이스 핸들러 연결 (중복 연결 없음)."""
    log_path = Path(params.log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(params.log_level.upper())

    for name in CLIENT_LOGGERS:
        client_logger = logging.getLogger(name)
        has_file_handler = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path.absolute()
            for h in client_logger.handlers
        )
        if not has_file_handler:
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
            client_logger.addHandler(handler)

        if isinstance(params.trace, logging.Handler) and params.trace not in client_logger.handlers:
            client_logger.addHandler(params.trace)
            if client_logger.getEffectiveLevel() > params.trace.level:
                client_logger.setLevel(params.trace.level)


def create_es_client(params: ClientParams) -> Elasticsearch:
    """Elasticsearch 클라이언트 생성.

    Args:
        params: 컴파일된 클라이언트 파라미터

    Returns:
        Elasticsearch 클라이언트 인스턴스.
    """
    if params.logging is not None and params.logging.enabled:
        _configure_logging(params.logging)
        logger.info(f"Client logging enabled: {params.logging.log_path}")

    # Basic Auth 사용
    if params.auth:
        return Elasticsearch(hosts=list(params.hosts), basic_auth=params.auth)

    return Elasticsearch(hosts=list(params.hosts))


def check_connection(es: Elasticsearch) -> bool:
    """클러스터가 ping에 응답하는지 확인.

    트랜스포트/API 오류는 False로 보고하고 원인을 로그로 남깁니다.
    """
    try:
        reachable = bool(es.ping())
    except (ApiError, TransportError) as e:
        logger.warning(f"Elasticsearch ping failed: {e}")
        return False
    if not reachable:
        logger.warning("Elasticsearch did not answer ping")
    return reachable
