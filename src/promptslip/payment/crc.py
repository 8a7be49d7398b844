"""CRC-16/CCITT-FALSE checksum for EMVCo QR payloads.

Parameters: polynomial 0x1021, initial register 0xFFFF, no input or output
reflection, no final XOR. Check value for ``"123456789"`` is ``0x29B1``.
"""

from typing import Union

POLYNOMIAL = 0x1021
INITIAL = 0xFFFF


def crc16_ccitt_value(data: Union[str, bytes]) -> int:
    """Compute the raw 16-bit CRC register over ``data``.

    Strings are checksummed over their ASCII bytes.
    """
    if isinstance(data, str):
        data = data.encode("ascii")

    crc = INITIAL
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


def crc16_ccitt(data: Union[str, bytes]) -> str:
    """Compute the CRC as 4 zero-padded uppercase hex digits."""
    return f"{crc16_ccitt_value(data):04X}"
