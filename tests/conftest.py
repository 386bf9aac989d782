import pytest

from wirebox import Container


@pytest.fixture
def container():
    c = Container.create()
    yield c
    c.flush()
