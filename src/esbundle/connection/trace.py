"""요청 트레이스 기록기.

debug 매니저의 클라이언트 로깅에 연결되는 logging.Handler입니다.
트랜스포트 로거가 남기는 요청/응답 로그를 메모리에 보관합니다.
"""

from __future__ import annotations

import logging
import threading


class TraceRecorder(logging.Handler):
    """ES 트랜스포트 로그를 메모리에 쌓는 핸들러."""

    def __init__(self, level: int = logging.DEBUG, capacity: int = 1000):
        super().__init__(level)
        self.capacity = capacity
        self._records: list[str] = []
        self._records_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._records_lock:
            self._records.append(message)
            if len(self._records) > self.capacity:
                del self._records[: len(self._records) - self.capacity]

    @property
    def records(self) -> list[str]:
        with self._records_lock:
            return list(self._records)

    def clear(self) -> None:
        with self._records_lock:
            self._records.clear()
