import pytest
from sqldialect.cache import Cache


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear all caches before and after each test to ensure test isolation."""
    Cache.get_instance().clear_all()
    yield
    Cache.get_instance().clear_all()


@pytest.fixture
def table_name():
    return 'tbl'


@pytest.fixture
def field_names():
    """Field list mixing plain, numbered and underscore-wrapped names"""
    return ['id', 'name', 'email', 'ts', 'field1', 'field_2', '__field_3__']


@pytest.fixture
def key_fields():
    """Composite key whose columns are not adjacent in the field list"""
    return ['id', '__field_3__']
