import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timeledger import models  # noqa: F401
from timeledger.db.base import Base
from timeledger.models.category import Category

OWNER = "owner-1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


def make_category(db, name="Work", owner_id=OWNER, **flags) -> Category:
    category = Category(user_id=owner_id, name=name, **flags)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def work(db):
    return make_category(db, "Work", requires_rest_after=True)


@pytest.fixture
def leisure(db):
    return make_category(db, "Leisure", is_rest_category=True)
