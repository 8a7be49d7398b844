"""Tag-length-value fields for EMVCo merchant-presented QR.

Each field is a 2-digit tag, a 2-digit decimal length and the value itself.
"""

from dataclasses import dataclass
from typing import Iterator

from promptslip.errors import FieldTooLong

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVField:
    """A single tag-length-value field."""

    tag: str
    value: str

    def __post_init__(self) -> None:
        if len(self.tag) != 2 or not self.tag.isascii() or not self.tag.isdigit():
            raise ValueError(f"TLV tag must be two ASCII digits, got {self.tag!r}")
        length = len(self.value.encode("utf-8"))
        if length > MAX_VALUE_LENGTH:
            raise FieldTooLong(self.tag, length)

    @property
    def length(self) -> int:
        """Byte length of the value."""
        return len(self.value.encode("utf-8"))

    def encode(self) -> str:
        """Render as ``tag + length + value``."""
        return f"{self.tag}{self.length:02d}{self.value}"

    def __str__(self) -> str:
        return self.encode()


def format_field(tag: str, value: str) -> str:
    """Format one TLV field. Raises FieldTooLong if value exceeds 99 bytes."""
    return TLVField(tag, value).encode()


def parse_fields(payload: str) -> Iterator[TLVField]:
    """Iterate the top-level TLV fields of an encoded payload.

    Raises:
        ValueError: if the payload is truncated or a length is not numeric
    """
    pos = 0
    while pos < len(payload):
        header = payload[pos:pos + 4]
        if len(header) < 4 or not header[2:].isdigit():
            raise ValueError(f"Malformed TLV header at offset {pos}: {header!r}")
        length = int(header[2:])
        value = payload[pos + 4:pos + 4 + length]
        if len(value) != length:
            raise ValueError(
                f"TLV field {header[:2]!r} at offset {pos} declares {length} "
                f"characters, only {len(value)} remain"
            )
        yield TLVField(header[:2], value)
        pos += 4 + length
