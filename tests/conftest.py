import sys
import pytest

from contextree.app.globals import installConfigService, installGlobalContext
from contextree.scope.global_context import GlobalContext



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def root():
    """
    Every test gets its own root scope, and with it an empty name ledger, so
    tests can coin the same name strings without tripping over each other.
    """
    fresh = GlobalContext("global")
    previous = installGlobalContext(fresh)
    yield fresh
    if previous is not None:
        installGlobalContext(previous)



@pytest.fixture(autouse=True)
def freshConfig(monkeypatch: pytest.MonkeyPatch):
    """Drop any cached config service; the next read bootstraps shipped defaults."""
    monkeypatch.delenv("CONTEXTREE_CONFIG", raising=False)
    previous = installConfigService(None)
    yield
    installConfigService(previous)



@pytest.fixture()
def setConfig():
    """Write runtime overrides into the (fresh) global config store."""
    from contextree.app.globals import getConfigService

    def _set(path: str, value) -> None:
        getConfigService().globalStore.set(path, value)
    return _set



@pytest.fixture()
def unusableUserConfig(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Points CONTEXTREE_CONFIG at a file the config schema rejects."""
    path = tmp_path / "contextree.json5"
    path.write_text("{debug: {traceBindings: 'yes'}, errors: {abortOnScram: 1}}", encoding="utf-8")
    monkeypatch.setenv("CONTEXTREE_CONFIG", str(path))
    return path
