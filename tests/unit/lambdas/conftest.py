from typing import cast

import pytest
from pytest import MonkeyPatch

from snaplink.types import LambdaContext


@pytest.fixture(autouse=True)
def cloud_environment(monkeypatch: MonkeyPatch) -> None:
    # Unhandled errors must be turned into 500 responses, not re-raised as in local SAM runs
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'snaplink'})
