import pytest

from querykit.core.config import get_settings
from querykit.core.relation import Relation
from tests.helpers import Order, widgets


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so env overrides do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def widgets_relation():
    return Relation(widgets)


@pytest.fixture
def orders_relation():
    return Relation.from_model(Order)
