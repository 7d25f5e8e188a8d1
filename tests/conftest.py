import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import Settings
from todo_api.store import TodoStore

REDIRECT_URL = "http://frontend.test:5173"


@pytest.fixture(name="settings")
def settings_fixture(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'todos.db'}",
        redirect_url=REDIRECT_URL,
    )


@pytest.fixture(name="store")
def store_fixture(settings: Settings):
    store = TodoStore.from_url(settings.database_url)
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture(name="client")
def client_fixture(settings: Settings, store: TodoStore):
    app = create_app(settings, store)
    # Redirects point at the front-end origin, which the test client must not follow
    with TestClient(app, follow_redirects=False) as client:
        yield client
