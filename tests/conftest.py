# tests/conftest.py
import os
import tempfile

# must be set before auction_house.db is imported
os.environ.setdefault(
    "DATABASE_URL", "sqlite:///" + os.path.join(tempfile.gettempdir(), "auction_house_test.db")
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("BID_RETRY_DELAY", "0")

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from auction_house import services
from auction_house.db import Base, get_db
from auction_house.main import app


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'auction.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def accounts(db):
    for name in ("alice", "bob", "carol"):
        services.register_account(db, name, f"{name}-pw")
    return ["alice", "bob", "carol"]


@pytest.fixture
def listing(db, accounts):
    return services.create_listing(
        db, "alice", "Bicycle", "Red road bike", Decimal("50"), "aW1hZ2U="
    )
