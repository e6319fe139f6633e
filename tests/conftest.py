import pytest

from htform.config import set_config


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)
