import pytest

from observable_default.runtime.stores import Defaults, MemoryStore
from observable_default.state import reset_settings


@pytest.fixture(autouse=True)
def fresh_state():
    """Every test starts with default settings and empty suites."""
    reset_settings()
    Defaults.reset_domains()
    had_shared = "shared" in Defaults.__dict__
    yield
    reset_settings()
    Defaults.reset_domains()
    if not had_shared and "shared" in Defaults.__dict__:
        del Defaults.shared


@pytest.fixture
def shared_suite():
    """Install ``Defaults.shared`` for the `.shared` shorthand."""
    Defaults.shared = Defaults.suite("SHARED")
    return Defaults.shared


@pytest.fixture
def isolated_store_type():
    """A store class with its own ``standard`` and ``shared`` instances."""
    class IsolatedStore(MemoryStore):
        pass

    IsolatedStore.standard = IsolatedStore()
    IsolatedStore.shared = IsolatedStore()
    return IsolatedStore
