"""
Pytest configuration and fixtures for the forum service tests
"""
import os

# Settings are read at import time; point the module-level engine at SQLite
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from forum.core.database import Base, build_engine, get_db
from forum.core.limiter import limiter
from forum.models import ForumCategory, Member
from forum.services.forum_post import ForumPostService

REPORT_THRESHOLD = 5

ADMIN_ID = 1
AUTHOR_ID = 7
OTHER_MEMBER_ID = 8
CATEGORY_ID = 3


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite database so that threads can share it"""
    engine = build_engine(f"sqlite:///{tmp_path / 'forum.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def members(db):
    """An admin, the post author and an unrelated member"""
    admin = Member(id=ADMIN_ID, name="Admin", email="admin@example.com", role="admin")
    author = Member(id=AUTHOR_ID, name="Author", email="author@example.com")
    other = Member(id=OTHER_MEMBER_ID, name="Other", email="other@example.com")
    db.add_all([admin, author, other])
    db.commit()
    return {"admin": admin, "author": author, "other": other}


@pytest.fixture
def category(db):
    category = ForumCategory(id=CATEGORY_ID, name="General", description="Anything goes")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def service(db):
    return ForumPostService(db, report_threshold=REPORT_THRESHOLD)


@pytest.fixture
def post(service, members, category):
    """A fresh active post by the author in the seeded category"""
    return service.create_post(AUTHOR_ID, CATEGORY_ID, "T", "C")


@pytest.fixture
def client(session_factory, members, category):
    """Test client bound to the per-test database"""
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
