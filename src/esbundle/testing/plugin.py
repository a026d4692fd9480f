"""pytest 플러그인: ElasticsearchTestCase 테스트 호출을 재시도로 감쌈.

conftest.py:
    pytest_plugins = ["esbundle.testing.plugin"]
"""

from __future__ import annotations

import pytest

from esbundle.testing.case import ElasticsearchTestCase
from esbundle.testing.retry import run_with_retries


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    instance = getattr(pyfuncitem, "instance", None)
    if not isinstance(instance, ElasticsearchTestCase):
        return None

    testfunction = pyfuncitem.obj
    funcargs = pyfuncitem.funcargs
    testargs = {arg: funcargs[arg] for arg in pyfuncitem._fixtureinfo.argnames}
    run_with_retries(lambda: testfunction(**testargs), instance.get_number_of_retries())
    return True
