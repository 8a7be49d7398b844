"""Tests for the CRC-16/CCITT-FALSE checksum."""

import pytest

from promptslip.payment.crc import crc16_ccitt, crc16_ccitt_value


class TestCRC16:
    """Tests for crc16_ccitt."""

    def test_check_value(self):
        """Standard check string gives the catalogued 0x29B1."""
        assert crc16_ccitt("123456789") == "29B1"
        assert crc16_ccitt_value("123456789") == 0x29B1

    def test_empty_input_is_initial_register(self):
        assert crc16_ccitt("") == "FFFF"

    def test_single_byte(self):
        assert crc16_ccitt("A") == "B915"

    def test_bytes_and_str_agree(self):
        assert crc16_ccitt(b"123456789") == crc16_ccitt("123456789")

    def test_always_four_uppercase_hex_digits(self):
        for data in ["", "0", "6304", "00020101021153037645802TH6304", "x" * 200]:
            result = crc16_ccitt(data)
            assert len(result) == 4
            assert result == result.upper()
            int(result, 16)

    def test_non_ascii_rejected(self):
        with pytest.raises(UnicodeEncodeError):
            crc16_ccitt("ก")
