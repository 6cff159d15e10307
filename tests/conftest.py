"""Shared pytest fixtures"""
import asyncio
import dataclasses

import pytest
from fastapi.testclient import TestClient

from eliteshop.config import settings
from eliteshop.db.storage import MemoryStorage
from eliteshop.store.cart import CartStore
from eliteshop.store.wishlist import WishlistStore
from eliteshop.web.main import create_app


class RecordingGateway:
    """Checkout collaborator that accepts every order and remembers it."""

    def __init__(self) -> None:
        self.charged = []

    async def charge(self, summary) -> None:
        self.charged.append(summary)


class BlockingGateway(RecordingGateway):
    """Holds every charge until `release` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def charge(self, summary) -> None:
        self.started.set()
        await self.release.wait()
        await super().charge(summary)


class FailingGateway:
    """Checkout collaborator that always declines."""

    def __init__(self) -> None:
        self.calls = 0

    async def charge(self, summary) -> None:
        self.calls += 1
        raise RuntimeError("card declined")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage, "cart")


@pytest.fixture
def wishlist(storage):
    return WishlistStore(storage, "wishlist")


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def blocking_gateway():
    return BlockingGateway()


@pytest.fixture
def failing_gateway():
    return FailingGateway()


@pytest.fixture
def test_settings(tmp_path):
    return dataclasses.replace(
        settings,
        db_path=str(tmp_path / "shop.db"),
        receipt_dir=str(tmp_path / "receipts"),
        checkout_delay=0.0,
    )


@pytest.fixture
def app(test_settings, storage, gateway):
    return create_app(test_settings, storage=storage, gateway=gateway)


@pytest.fixture
def client(app):
    return TestClient(app)
