# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import Task
from infra.config import Settings
from infra.db.base import Base
from infra.operational_support import reset_support_log
from infra.services import build_service_graph


@pytest.fixture(autouse=True)
def isolated_user_dirs(monkeypatch, tmp_path):
    # keep logs, support events and the default database out of the real home directory
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for name in ("CPA_DB_PATH", "CPA_LOG_LEVEL", "CPA_SINK_ANCHOR", "CPA_APP_VERSION"):
        monkeypatch.delenv(name, raising=False)
    reset_support_log()
    yield
    reset_support_log()


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def services(session, tmp_path):
    settings = Settings(db_path=tmp_path / "unused.db")
    return build_service_graph(session, settings).as_dict()


@pytest.fixture
def make_task():
    """Factory for in-memory tasks: make_task("B", 16, ["A"])."""

    def _make(task_id, hours=8.0, dependencies=(), **extra):
        return Task(
            id=task_id,
            project_id=extra.pop("project_id", "p-1"),
            title=extra.pop("title", f"Task {task_id}"),
            estimated_hours=hours,
            dependencies=list(dependencies),
            **extra,
        )

    return _make
