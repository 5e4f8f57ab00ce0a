import importlib

import pytest


@pytest.fixture(params=["numpy", "array_api_strict"])
def xp(request):
    return importlib.import_module(request.param)


@pytest.fixture
def assert_normalized():
    def check(x):
        assert x.ok()
        digits = x.digits()
        assert len(digits) == x.count
        assert x.count == 1 or digits[-1] != 0
    return check
