import pytest

from shapegeo import log
from shapegeo.settings import GeometrySettingsManager


@pytest.fixture(autouse=True)
def _fresh_state():
    """Each test starts from built-in settings and a silent log callback."""
    GeometrySettingsManager.instance().reset()
    log.set_callback(None)
    yield
    GeometrySettingsManager.instance().reset()
    log.set_callback(None)
    log.set_level(log.Level.WARN)
