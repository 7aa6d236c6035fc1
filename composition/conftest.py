from sys import argv

import pytest

from composition.hashset import HashSet
from composition.util import set_debug


def pytest_configure(config):
    if "-v" in argv or "-vv" in argv:
        set_debug(True)


@pytest.fixture(params=[set, HashSet], ids=["builtin", "hashset"])
def backing(request):
    """An empty mutable set, of each kind the wrappers are expected to handle."""
    return request.param()
