# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - Every test gets its own in-memory SQLite DB (schema applied on open)
# - Repos / engine are built on top of that connection
# - One QCoreApplication per session so AppState can emit Qt signals
# - Money is always integer cents
# ---------------------------------------------------------------------

from __future__ import annotations

from typing import Callable

import pytest
from PySide6.QtCore import QCoreApplication

from shopkeeper.database import MEMORY, get_connection
from shopkeeper.database.repositories import Customer, Product, Repositories
from shopkeeper.database.store import RecordStore
from shopkeeper.modules.app_state import AppState
from shopkeeper.modules.sales import SaleEngine


# ---------- Qt: a core application is enough for signals ----------
@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# ---------- Per-test connection ----------
@pytest.fixture()
def conn():
    con = get_connection(MEMORY)
    try:
        yield con
    finally:
        con.close()


@pytest.fixture()
def store(conn) -> RecordStore:
    return RecordStore(conn)


@pytest.fixture()
def repos(store) -> Repositories:
    return Repositories.for_store(store)


@pytest.fixture()
def engine(repos) -> SaleEngine:
    return SaleEngine(repos)


@pytest.fixture()
def state(repos) -> AppState:
    s = AppState(repos)
    s.load()
    return s


# ---------- Handy entities ----------
@pytest.fixture()
def make_product(repos) -> Callable[..., Product]:
    def make(**overrides) -> Product:
        fields = dict(
            name="Shape Maple 8.0",
            price=25000,
            cost_price=15000,
            quantity=10,
            category="Shapes",
        )
        fields.update(overrides)
        return repos.products.create(Product(**fields))
    return make


@pytest.fixture()
def customer(repos) -> Customer:
    return repos.customers.create(Customer(name="Ana Souza", phone="11987654321"))
