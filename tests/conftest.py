import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pharmacy_pos.db.base import Base
from pharmacy_pos.models import Medicine, User, UserRole, Vendor
from pharmacy_pos.schemas.medicine import MedicineRecord
from pharmacy_pos.services.errors import PersistenceError
from pharmacy_pos.services.settlement_store import SettlementStore
from pharmacy_pos.utils.timezone import today_ist

FIXED_NOW = datetime(2026, 3, 14, 10, 30, 0)


def make_record(**overrides) -> MedicineRecord:
    data = dict(
        id=1,
        name="Paracetamol 500mg",
        price=Decimal("100"),
        tax=Decimal("12"),
        discount=Decimal("10"),
        stock=10,
        expiry_date=date.today() + timedelta(days=365),
        prescription_required=False,
    )
    data.update(overrides)
    return MedicineRecord(**data)


class SpyStore(SettlementStore):
    """In-memory store recording every write; can fail on a chosen step."""

    def __init__(self, fail_on=None, transactional=False, taken_numbers=()):
        self.fail_on = fail_on
        self.transactional = transactional
        self.taken_numbers = set(taken_numbers)
        self.headers = []
        self.items = []
        self.stock_updates = []
        self.commits = 0
        self.rollbacks = 0

    @property
    def write_count(self):
        return len(self.headers) + len(self.items) + len(self.stock_updates)

    def invoice_number_exists(self, number):
        return number in self.taken_numbers

    def insert_invoice(self, header):
        if self.fail_on == "header":
            raise PersistenceError("header insert failed", step="header")
        self.headers.append(dict(header))
        return len(self.headers)

    def insert_items(self, rows):
        if self.fail_on == "items":
            raise PersistenceError("items insert failed", step="items")
        self.items.extend(rows)

    def decrement_stock(self, medicine_id, quantity):
        if self.fail_on == "stock":
            raise RuntimeError("connection reset")
        self.stock_updates.append((medicine_id, quantity))
        return 0

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def biller():
    return SimpleNamespace(id=7, username="asha", email="asha@example.com")


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db):
    admin = User(username="admin", email="admin@example.com", role=UserRole.ADMIN)
    biller_user = User(username="ravi", email="ravi@example.com", role=UserRole.BILLER)
    other = User(username="meena", email="meena@example.com", role=UserRole.BILLER)
    db.add_all([admin, biller_user, other])
    db.commit()
    return SimpleNamespace(admin=admin, biller=biller_user, other=other)


@pytest.fixture
def catalog(db):
    today = today_ist()
    vendor = Vendor(name="Sri Sai Distributors", phone="9876500000")
    db.add(vendor)
    db.flush()
    meds = SimpleNamespace(
        paracetamol=Medicine(name="Paracetamol 500mg", price=Decimal("100"), tax=Decimal("12"),
                             discount=Decimal("10"), stock=10,
                             expiry_date=today + timedelta(days=365), vendor_id=vendor.id),
        amoxicillin=Medicine(name="Amoxicillin 250mg", price=Decimal("80"), tax=Decimal("5"),
                             discount=Decimal("0"), stock=100,
                             expiry_date=today + timedelta(days=200),
                             prescription_required=True, vendor_id=vendor.id),
        cough_syrup=Medicine(name="Cough Syrup", price=Decimal("45.50"), tax=Decimal("18"),
                             discount=Decimal("0"), stock=0,
                             expiry_date=today + timedelta(days=90)),
        eye_drops=Medicine(name="Eye Drops", price=Decimal("60"), tax=Decimal("12"),
                           discount=Decimal("5"), stock=30,
                           expiry_date=today + timedelta(days=10)),
        old_stock=Medicine(name="Antacid Gel", price=Decimal("30"), tax=Decimal("12"),
                           discount=Decimal("0"), stock=0,
                           expiry_date=today - timedelta(days=3)),
    )
    db.add_all(vars(meds).values())
    db.commit()
    return meds
