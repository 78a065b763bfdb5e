import pytest

from gtfs_layers.data.config import get_layer_config


@pytest.fixture(autouse=True)
def clear_config_cache(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from ambient GTFS_* settings and the cached config."""
    monkeypatch.delenv("GTFS_SIMPLIFY_TOLERANCE", raising=False)
    monkeypatch.delenv("GTFS_SIMPLIFY_HIGH_QUALITY", raising=False)
    get_layer_config.cache_clear()
    yield
    get_layer_config.cache_clear()
