# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os
import sys

# Add the src directory to the Python path to allow imports
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
src_path = os.path.join(project_root, 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from libroteca.db.session import Base, get_db
# Import all models to ensure they are registered with Base
from libroteca.models import user, book, review, reading_list, review_like  # noqa: F401
from libroteca.models.book import Book
from libroteca.models.user import User

# --- Test Database Setup ---
# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

# A fresh engine per test: CRUD functions commit and roll back on their own,
# so an outer rollback cannot isolate tests
@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    # Create all tables defined in your models
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(db_engine):
    """Provides a session bound to the per-test database."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()

# --- Helper Fixtures ---
@pytest.fixture
def make_user(db_session):
    def _make_user(user_id="user-1", **fields):
        user = User(id=user_id, **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
def make_book(db_session):
    def _make_book(title="Test Book", author="Test Author", **fields):
        book = Book(title=title, author=author, **fields)
        db_session.add(book)
        db_session.commit()
        db_session.refresh(book)
        return book
    return _make_book

@pytest.fixture
def test_user(make_user):
    return make_user("user-1", email="reader@libroteca.org", first_name="Ana", last_name="García")

@pytest.fixture
def test_user_2(make_user):
    return make_user("user-2", email="second.reader@libroteca.org")

@pytest.fixture
def test_book(make_book):
    return make_book(title="Review Test Book", author="Test Author", genre="Fantasy", published_year=2020)

# --- API ---
@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient
    from libroteca.api.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    return {"X-User-Id": "user-1"}
