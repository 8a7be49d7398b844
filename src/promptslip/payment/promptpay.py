"""PromptPay QR payload encoder.

Builds the EMVCo merchant-presented QR payload used by Thai PromptPay:

    00 payload format indicator   "01"
    01 point of initiation        "11" (dynamic, one-time)
    29 merchant account info      nested: 00 AID, 01 target kind, 02 target
    53 transaction currency       "764" (THB)
    54 transaction amount         optional, two decimals
    58 country code               "TH"
    63 CRC                        CRC-16/CCITT-FALSE over everything before it

Field order is fixed. Some scanners reject payloads that are otherwise valid
but reordered.
"""

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Union

from promptslip.errors import InvalidAmount, InvalidTargetFormat
from promptslip.payment.crc import crc16_ccitt
from promptslip.payment.tlv import format_field

logger = logging.getLogger(__name__)

Amount = Union[int, float, str, Decimal]

# Field tags
TAG_FORMAT_INDICATOR = "00"
TAG_POINT_OF_INITIATION = "01"
TAG_MERCHANT_ACCOUNT = "29"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"
TAG_CRC = "63"

# Merchant account sub-tags
SUBTAG_AID = "00"
SUBTAG_TARGET_KIND = "01"
SUBTAG_TARGET = "02"

PAYLOAD_FORMAT = "01"
POI_DYNAMIC = "11"
POI_STATIC = "12"
PROMPTPAY_AID = "A000000677010111"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"
COUNTRY_CALLING_CODE = "66"

# CRC tag plus its fixed length, included in the checksummed data
CRC_PREFIX = f"{TAG_CRC}04"

_NON_DIGITS = re.compile(r"[^0-9]")
_CENTS = Decimal("0.01")
MAX_AMOUNT_LENGTH = 13  # EMVCo limit for the transaction amount field


class TargetKind(Enum):
    """PromptPay proxy type, valued by its wire code."""

    MOBILE = "01"
    NATIONAL_ID = "02"  # Also covers tax IDs and e-wallet IDs


@dataclass(frozen=True)
class PaymentTarget:
    """A normalized PromptPay proxy."""

    kind: TargetKind
    digits: str

    @classmethod
    def parse(cls, raw: str) -> "PaymentTarget":
        """Normalize a raw target string.

        Non-digits are stripped. A 10-digit number starting with 0 is a
        local mobile number and gets the 66 country code in place of the
        leading 0. Anything with 13 or more digits is a tax or national ID
        and is used as-is.

        Raises:
            InvalidTargetFormat: if the digits match neither shape
        """
        digits = _NON_DIGITS.sub("", raw or "")

        if len(digits) == 10 and digits.startswith("0"):
            return cls(TargetKind.MOBILE, COUNTRY_CALLING_CODE + digits[1:])
        if len(digits) >= 13:
            return cls(TargetKind.NATIONAL_ID, digits)

        raise InvalidTargetFormat(raw, digits)

    def merchant_account_info(self) -> str:
        """Nested TLV content of the merchant account information field."""
        return (
            format_field(SUBTAG_AID, PROMPTPAY_AID)
            + format_field(SUBTAG_TARGET_KIND, self.kind.value)
            + format_field(SUBTAG_TARGET, self.digits)
        )


def format_amount(amount: Amount) -> str:
    """Render an amount with exactly two fraction digits, no separators.

    Rounds half-up. Floats are converted through ``str`` so ``0.1 + 0.2``
    style binary noise does not leak into the payload.

    Raises:
        InvalidAmount: if the amount is negative, not finite, not a number or
            longer than MAX_AMOUNT_LENGTH characters once formatted
    """
    if isinstance(amount, bool):
        raise InvalidAmount(amount)
    if isinstance(amount, float) and not math.isfinite(amount):
        raise InvalidAmount(amount, "not finite")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(amount) from None

    if not value.is_finite():
        raise InvalidAmount(amount, "not finite")
    if value < 0:
        raise InvalidAmount(amount, "negative")

    try:
        text = f"{value.quantize(_CENTS, rounding=ROUND_HALF_UP):f}"
    except InvalidOperation:
        raise InvalidAmount(amount, "too large") from None
    if len(text) > MAX_AMOUNT_LENGTH:
        raise InvalidAmount(amount, "too large")
    return text


def encode_payload(target: str, amount: Optional[Amount] = None) -> str:
    """Build a PromptPay QR payload.

    Args:
        target: Mobile number (08x...) or tax/national ID, any punctuation
        amount: Amount in THB; omit for an open-amount QR

    Returns:
        Payload string ready for QR rendering

    Raises:
        InvalidTargetFormat: if the target is not a recognised shape
        InvalidAmount: if the amount is negative or not a number
    """
    proxy = PaymentTarget.parse(target)

    parts = [
        format_field(TAG_FORMAT_INDICATOR, PAYLOAD_FORMAT),
        format_field(TAG_POINT_OF_INITIATION, POI_DYNAMIC),
        format_field(TAG_MERCHANT_ACCOUNT, proxy.merchant_account_info()),
        format_field(TAG_CURRENCY, CURRENCY_THB),
    ]
    if amount is not None:
        parts.append(format_field(TAG_AMOUNT, format_amount(amount)))
    parts.append(format_field(TAG_COUNTRY, COUNTRY_TH))
    parts.append(CRC_PREFIX)

    data = "".join(parts)
    payload = data + crc16_ccitt(data)

    logger.debug(
        f"PromptPay payload built: kind={proxy.kind.name} "
        f"amount={'open' if amount is None else 'fixed'} length={len(payload)}"
    )
    return payload


def verify_payload(payload: str) -> bool:
    """Check the trailing CRC field of a payload.

    Returns:
        True if the payload ends with ``6304`` plus a CRC matching the data
    """
    if len(payload) < 8 or payload[-8:-4] != CRC_PREFIX:
        return False
    return crc16_ccitt(payload[:-4]) == payload[-4:].upper()


class PromptPayEncoder:
    """PromptPay encoder bound to a default merchant target.

    Handy for request handlers that always charge the same shop account.
    """

    def __init__(self, default_target: Optional[str] = None):
        self._default_target = default_target

    def encode(self, amount: Optional[Amount] = None, target: Optional[str] = None) -> str:
        """Encode a payload for ``target`` or the default merchant target."""
        target = target or self._default_target
        if not target:
            raise InvalidTargetFormat(target or "")
        return encode_payload(target, amount)
