"""
Test configuration and fixtures
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from surisql.models import Base
from tests.models import Item, Tag

# In-memory SQLite shared by every connection of the pool
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)

ITEMS = [
    ("Anvil", "tools", 120),
    ("Bolt", "tools", 1),
    ("Chisel", "tools", 15),
    ("Drill", "tools", 80),
    ("Easel", "art", 45),
    ("Fresco kit", "art", 7),
    ("Gouache", "art", 7),
]


@pytest.fixture(scope="function")
def session():
    """Fresh schema and session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def items(session):
    """Seven committed items with ids 1..7, in name order."""
    rows = [Item(name=name, category=category, price=price) for name, category, price in ITEMS]
    session.add_all(rows)
    session.commit()
    return rows


@pytest.fixture(scope="function")
def tags(session):
    rows = [Tag(label="new"), Tag(label="sale")]
    session.add_all(rows)
    session.commit()
    return rows
