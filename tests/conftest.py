from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Any

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.deps import get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from app.models import Base, Listing, User  # noqa: E402


@pytest.fixture()
def engine() -> Iterator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)


@pytest.fixture()
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def _get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    def _headers(user_id: str, **claims: Any) -> dict[str, str]:
        token = create_access_token({"sub": user_id, **claims})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def seller_headers(auth_headers) -> dict[str, str]:
    return auth_headers(
        "seller-1", email="seller@example.com", first_name="Sam", last_name="Seller"
    )


@pytest.fixture()
def buyer_headers(auth_headers) -> dict[str, str]:
    return auth_headers(
        "buyer-1", email="buyer@example.com", first_name="Bea", last_name="Buyer"
    )


@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
    def _make(user_id: str, **fields: Any) -> User:
        user = User(id=user_id, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_listing(db: Session) -> Callable[..., Listing]:
    def _make(seller_id: str, **fields: Any) -> Listing:
        data: dict[str, Any] = {
            "title": "Vintage lamp",
            "description": "Brass desk lamp in working order",
            "price": Decimal("40.00"),
            "category": "home",
            "condition": "good",
        }
        data.update(fields)
        listing = Listing(seller_id=seller_id, **data)
        db.add(listing)
        db.commit()
        db.refresh(listing)
        return listing

    return _make


@pytest.fixture()
def listing_payload() -> Callable[..., dict[str, Any]]:
    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": "Used textbook",
            "description": "Intro to algorithms, some highlighting",
            "price": "25.00",
            "category": "books",
            "condition": "good",
            "tags": ["cs", "textbook"],
        }
        payload.update(overrides)
        return payload

    return _payload
