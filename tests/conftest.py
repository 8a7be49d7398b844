"""Shared pytest fixtures for promptslip tests."""

import os

import pytest

from promptslip.config import PAPER_58MM, get_settings
from promptslip.printing.receipt import LineItem, ReceiptData, ReceiptEncoder


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from PROMPTSLIP_* environment and cached settings."""
    for key in list(os.environ):
        if key.startswith("PROMPTSLIP_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def encoder() -> ReceiptEncoder:
    """58mm encoder with explicit configuration."""
    return ReceiptEncoder(paper=PAPER_58MM, codec="cp874", feed=3)


@pytest.fixture
def minimal_receipt() -> ReceiptData:
    """Receipt with only the required fields."""
    return ReceiptData(
        shop_name="Shop",
        receipt_no="R1",
        date="2024-01-01",
        cashier="Ann",
        items=[LineItem(name="Tea", qty=2, unit_price=35, line_total=70)],
        subtotal=70,
        total=70,
        payment_method="cash",
    )


@pytest.fixture
def full_receipt() -> ReceiptData:
    """Receipt with every optional block present."""
    return ReceiptData(
        shop_name="Baan Pharmacy",
        shop_address="12 Sukhumvit Rd, Bangkok",
        shop_phone="02-123-4567",
        tax_id="0105561234567",
        receipt_no="INV-2024-0001",
        date="15/03/2024 14:30",
        cashier="Somchai",
        items=[
            LineItem(name="Paracetamol 500mg", qty=2, unit_price=35, line_total=70),
            LineItem(name="Vitamin C", qty=1, unit_price=12.5, line_total=12.5),
        ],
        subtotal=82.5,
        discount=25.5,
        vat=3.99,
        total=60.99,
        payment_method="Cash",
        amount_paid=100,
        change=39.01,
        points_earned=6,
        points_balance=120,
    )
