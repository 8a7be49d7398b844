"""PromptPay QR payment payloads."""

from promptslip.payment.crc import crc16_ccitt, crc16_ccitt_value
from promptslip.payment.tlv import TLVField, format_field, parse_fields
from promptslip.payment.promptpay import (
    PaymentTarget,
    PromptPayEncoder,
    TargetKind,
    encode_payload,
    format_amount,
    verify_payload,
)

__all__ = [
    # Checksum
    "crc16_ccitt",
    "crc16_ccitt_value",
    # TLV
    "TLVField",
    "format_field",
    "parse_fields",
    # Payload
    "PaymentTarget",
    "PromptPayEncoder",
    "TargetKind",
    "encode_payload",
    "format_amount",
    "verify_payload",
]
