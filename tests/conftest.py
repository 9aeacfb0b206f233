import os

# Configure before anything imports app.config
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_taskmaster.db")
os.environ["ENABLE_OPENAI"] = "false"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.database import SessionLocal, Base, engine, init_db
from app.dependencies import get_label_suggester


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    init_db(drop=True)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def use_suggester():
    """Install a suggester for the request path: use_suggester(FakeSuggester("work"))."""
    def install(suggester):
        app.dependency_overrides[get_label_suggester] = lambda: suggester
        return suggester
    return install
