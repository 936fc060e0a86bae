"""Shared fixtures: every test gets a fresh Env, default Alloc and log registry."""

import pytest

from ustr import Alloc, Env, Log


@pytest.fixture(autouse=True)
def isolated_runtime(tmp_path):
    Env.reset(Env(workDir=tmp_path, environ={}))
    Alloc.resetDefVal()
    Log.clear()
    yield
    Env.reset()
    Alloc.resetDefVal()
    Log.clear()


@pytest.fixture
def alloc():
    """Private allocator so tests can inspect live bytes."""
    return Alloc.make()
