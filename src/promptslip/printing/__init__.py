"""Printing module for promptslip - Thermal receipt generation."""

from promptslip.printing.commands import Command
from promptslip.printing.layout import LayoutEngine, ReceiptLayout
from promptslip.printing.receipt import (
    LineItem,
    Receipt,
    ReceiptData,
    ReceiptEncoder,
    encode_receipt,
)
from promptslip.printing.text import pad_end, pad_start, truncate

__all__ = [
    "Command",
    # Layout
    "LayoutEngine",
    "ReceiptLayout",
    "pad_end",
    "pad_start",
    "truncate",
    # Receipt
    "LineItem",
    "Receipt",
    "ReceiptData",
    "ReceiptEncoder",
    "encode_receipt",
]
