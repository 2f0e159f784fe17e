import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from database.session import Database
from main import create_app


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def client():
    app = create_app(Settings(database_url="sqlite://"))
    with TestClient(app) as c:
        yield c
