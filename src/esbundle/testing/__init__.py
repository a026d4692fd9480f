"""테스트 스캐폴딩."""

from esbundle.testing.case import ElasticsearchTestCase, parse_version, version_matches
from esbundle.testing.retry import run_with_retries

__all__ = [
    "ElasticsearchTestCase",
    "run_with_retries",
    "parse_version",
    "version_matches",
]
