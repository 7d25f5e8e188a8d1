import pytest
from fastapi.testclient import TestClient

from todo_api import main as main_module
from todo_api.main import create_app
from todo_api.settings import Settings

ENV_VARS = ("DATABASE_URL", "REDIRECT_URL", "HOST", "PORT", "LOG_LEVEL")


@pytest.fixture(name="env")
def env_fixture(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr("todo_api.settings.load_dotenv", lambda: False)
    return monkeypatch


@pytest.fixture(name="served")
def served_fixture(monkeypatch):
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    return calls


class TestMain:
    def test_missing_database_url_exits_non_zero(self, env, served):
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()
        assert excinfo.value.code == 1
        assert served == []

    @pytest.mark.parametrize("url", ["definitely not a url", "postgresql://u:p@host:notaport/db"])
    def test_unparsable_database_url_exits_non_zero(self, env, served, url):
        env.setenv("DATABASE_URL", url)
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()
        assert excinfo.value.code == 1
        assert served == []

    def test_unreachable_database_exits_non_zero(self, env, served, tmp_path):
        env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'no' / 'such' / 'dir.db'}")
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()
        assert excinfo.value.code == 1
        assert served == []

    def test_serves_on_configured_address(self, env, served, tmp_path):
        env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'todos.db'}")
        env.setenv("HOST", "127.0.0.1")
        env.setenv("PORT", "8181")

        main_module.main()

        assert len(served) == 1
        app, kwargs = served[0]
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8181
        # Schema was created before serving
        assert app.state.store.list_all() == []
        app.state.store.dispose()


class TestCreateApp:
    def test_builds_store_from_settings(self, tmp_path):
        settings = Settings(database_url=f"sqlite:///{tmp_path / 'todos.db'}")
        app = create_app(settings)
        app.state.store.init_schema()

        with TestClient(app, follow_redirects=False) as client:
            res = client.post("/create", data={"description": "hello"})
            assert res.status_code == 303
            assert res.headers["location"] == "http://localhost:5173"
            assert client.get("/").json() == [{"id": 1, "description": "hello", "done": False}]

    def test_openapi_lists_routes(self, tmp_path):
        settings = Settings(database_url=f"sqlite:///{tmp_path / 'todos.db'}")
        app = create_app(settings)
        paths = app.openapi()["paths"]
        assert set(paths) == {"/", "/create", "/delete/{todo_id}", "/update"}
        app.state.store.dispose()
