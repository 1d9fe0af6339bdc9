import pytest
import litebind

RW = litebind.OPEN_READWRITE | litebind.OPEN_CREATE

@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "test.db")

@pytest.fixture
def conn(db_path):
    c = litebind.open(db_path, RW)
    yield c
    c.close()

@pytest.fixture
def mem():
    c = litebind.open(":memory:", RW)
    yield c
    c.close()
