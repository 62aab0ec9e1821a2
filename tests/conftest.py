import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from todo_backend.config import Settings
from todo_backend.main import create_app


# 💡 Отдельная sqlite-БД на каждый тест
@pytest.fixture()
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'test.db'}", jwt_secret="test-secret")

@pytest.fixture()
def app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()

@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def client(app):
    return TestClient(app)

# 💡 HTTP-клиент с ASGITransport
@pytest.fixture()
async def aclient(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
