"""promptslip - PromptPay QR payloads and thermal receipt streams for POS checkout."""

__version__ = "0.1.0"

from promptslip.errors import (
    PromptSlipError,
    InvalidTargetFormat,
    InvalidAmount,
    FieldTooLong,
    MissingRequiredModelField,
    UnknownPaperProfile,
)
from promptslip.payment import encode_payload, verify_payload
from promptslip.payment.qr_image import render_qr_image, qr_raster_commands
from promptslip.printing import ReceiptData, LineItem, ReceiptEncoder, encode_receipt

__all__ = [
    "__version__",
    # Errors
    "PromptSlipError",
    "InvalidTargetFormat",
    "InvalidAmount",
    "FieldTooLong",
    "MissingRequiredModelField",
    "UnknownPaperProfile",
    # QR
    "encode_payload",
    "verify_payload",
    "render_qr_image",
    "qr_raster_commands",
    # Receipt
    "ReceiptData",
    "LineItem",
    "ReceiptEncoder",
    "encode_receipt",
]
