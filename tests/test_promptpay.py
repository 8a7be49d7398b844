"""Tests for the PromptPay QR payload encoder."""

from decimal import Decimal

import pytest

from promptslip.errors import InvalidAmount, InvalidTargetFormat
from promptslip.payment.crc import crc16_ccitt
from promptslip.payment.promptpay import (
    PaymentTarget,
    PromptPayEncoder,
    TargetKind,
    encode_payload,
    format_amount,
    verify_payload,
)
from promptslip.payment.tlv import parse_fields

MERCHANT_MOBILE = "0016A000000677010111" "010201" "021166812345678"


def _fields(payload: str) -> dict:
    return {f.tag: f.value for f in parse_fields(payload)}


class TestPaymentTarget:
    """Tests for target normalization."""

    def test_mobile_gets_country_code(self):
        target = PaymentTarget.parse("0812345678")
        assert target.kind == TargetKind.MOBILE
        assert target.digits == "66812345678"

    def test_mobile_punctuation_stripped(self):
        assert PaymentTarget.parse("081-234-5678").digits == "66812345678"
        assert PaymentTarget.parse(" (081) 234 5678 ").digits == "66812345678"

    @pytest.mark.parametrize("raw", ["0612345678", "0912345678", "0212345678"])
    def test_any_ten_digit_local_number(self, raw):
        target = PaymentTarget.parse(raw)
        assert target.kind == TargetKind.MOBILE
        assert target.digits.startswith("66")
        assert len(target.digits) == 11

    def test_national_id_used_as_is(self):
        target = PaymentTarget.parse("1-2345-67890-12-3")
        assert target.kind == TargetKind.NATIONAL_ID
        assert target.digits == "1234567890123"

    def test_thirteen_digits_starting_with_zero_is_national_id(self):
        target = PaymentTarget.parse("0105561234567")
        assert target.kind == TargetKind.NATIONAL_ID
        assert target.digits == "0105561234567"

    def test_fifteen_digit_ewallet_id(self):
        target = PaymentTarget.parse("140000012345678")
        assert target.kind == TargetKind.NATIONAL_ID

    @pytest.mark.parametrize("raw", [
        "",
        "abc",
        "081234567",      # 9 digits
        "1812345678",     # 10 digits, no leading 0
        "66812345678",    # already internationalised
        "012345678901",   # 12 digits
    ])
    def test_other_shapes_rejected(self, raw):
        with pytest.raises(InvalidTargetFormat) as exc_info:
            PaymentTarget.parse(raw)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.target == raw

    def test_merchant_account_info(self):
        assert PaymentTarget.parse("0812345678").merchant_account_info() == MERCHANT_MOBILE


class TestFormatAmount:
    """Tests for amount rendering."""

    @pytest.mark.parametrize("amount,expected", [
        (0, "0.00"),
        (100, "100.00"),
        (125, "125.00"),
        (12.5, "12.50"),
        ("99.9", "99.90"),
        (Decimal("1E+2"), "100.00"),
        (Decimal("12.345"), "12.35"),
        (0.1 + 0.2, "0.30"),
        (1234567.891, "1234567.89"),
        ("9999999999.99", "9999999999.99"),
    ])
    def test_two_fraction_digits(self, amount, expected):
        assert format_amount(amount) == expected

    @pytest.mark.parametrize("amount", [-1, "-0.01", "abc", "", float("nan"), float("inf"), True])
    def test_invalid(self, amount):
        with pytest.raises(InvalidAmount):
            format_amount(amount)

    @pytest.mark.parametrize("amount", [10 ** 27, "1e30", Decimal("1E+100"), 10 ** 10, "9999999999.995"])
    def test_too_large(self, amount):
        with pytest.raises(InvalidAmount) as exc_info:
            format_amount(amount)
        assert "too large" in str(exc_info.value)


class TestEncodePayload:
    """Tests for encode_payload."""

    def test_mobile_with_amount(self):
        payload = encode_payload("0812345678", 100)
        assert payload[:-4] == (
            "000201"
            "010211"
            "2941" + MERCHANT_MOBILE +
            "5303764"
            "5406100.00"
            "5802TH"
            "6304"
        )
        assert payload.startswith("0002" "01")

    def test_trailer_is_crc_of_preceding_characters(self):
        payload = encode_payload("0812345678", 100)
        tail = payload[-4:]
        assert len(tail) == 4
        int(tail, 16)
        assert tail == crc16_ccitt(payload[:-4])

    def test_merchant_digits(self):
        merchant = _fields(encode_payload("0812345678", 100))["29"]
        inner = _fields(merchant)
        assert inner["00"] == "A000000677010111"
        assert inner["01"] == "01"
        assert inner["02"] == "66812345678"

    def test_amount_field(self):
        assert _fields(encode_payload("0812345678", 100))["54"] == "100.00"

    def test_no_amount_omits_field(self):
        payload = encode_payload("0812345678")
        assert "54" not in _fields(payload)
        assert list(_fields(payload)) == ["00", "01", "29", "53", "58", "63"]

    def test_zero_amount_kept(self):
        assert _fields(encode_payload("0812345678", 0))["54"] == "0.00"

    def test_national_id(self):
        merchant = _fields(encode_payload("1234567890123", 50))["29"]
        inner = _fields(merchant)
        assert inner["01"] == "02"
        assert inner["02"] == "1234567890123"

    def test_field_order_fixed(self):
        tags = list(_fields(encode_payload("0812345678", 10)))
        assert tags == ["00", "01", "29", "53", "54", "58", "63"]

    def test_declared_lengths_match_values(self):
        payload = encode_payload("1234567890123", "1500.5")
        consumed = sum(4 + len(f.value) for f in parse_fields(payload))
        assert consumed == len(payload)

    def test_idempotent(self):
        assert encode_payload("0812345678", 100) == encode_payload("0812345678", 100)
        assert encode_payload("081-234-5678", 100) == encode_payload("0812345678", 100.0)

    def test_ascii_only(self):
        assert encode_payload("0812345678", 100).isascii()

    def test_invalid_target(self):
        with pytest.raises(InvalidTargetFormat):
            encode_payload("12345", 100)

    def test_invalid_amount(self):
        with pytest.raises(InvalidAmount):
            encode_payload("0812345678", -5)


class TestVerifyPayload:
    """Tests for verify_payload."""

    def test_valid(self):
        assert verify_payload(encode_payload("0812345678", 100))
        assert verify_payload(encode_payload("1234567890123"))

    def test_lowercase_crc_accepted(self):
        payload = encode_payload("0812345678", 100)
        assert verify_payload(payload[:-4] + payload[-4:].lower())

    def test_tampered_amount(self):
        payload = encode_payload("0812345678", 100)
        assert not verify_payload(payload.replace("100.00", "900.00"))

    def test_missing_crc_tag(self):
        assert not verify_payload("000201")
        assert not verify_payload("")


class TestPromptPayEncoder:
    """Tests for PromptPayEncoder."""

    def test_uses_default_target(self):
        encoder = PromptPayEncoder(default_target="0812345678")
        assert encoder.encode(100) == encode_payload("0812345678", 100)

    def test_explicit_target_wins(self):
        encoder = PromptPayEncoder(default_target="0812345678")
        assert encoder.encode(100, target="1234567890123") == encode_payload("1234567890123", 100)

    def test_no_target(self):
        with pytest.raises(InvalidTargetFormat):
            PromptPayEncoder().encode(100)
