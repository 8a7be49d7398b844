"""ESC/POS command set for 58mm/80mm thermal receipt printers.

Fixed sequences are members of ``Command``; a misspelt name fails at
lookup instead of silently printing garbage. Commands that take a runtime
argument (paper feed, raster images) are built by the helpers below.
"""

from enum import Enum

ESC = b'\x1b'
GS = b'\x1d'
LF = b'\x0a'


class Command(Enum):
    """Named fixed-byte printer commands."""

    # Initialize printer (ESC @)
    INIT = ESC + b'@'

    # Character code table 0x1E: Thai, code page 874 (ESC t n)
    CODEPAGE_THAI = ESC + b't\x1e'

    # Justification (ESC a n)
    ALIGN_LEFT = ESC + b'a\x00'
    ALIGN_CENTER = ESC + b'a\x01'
    ALIGN_RIGHT = ESC + b'a\x02'

    # Character size (GS ! n)
    SIZE_NORMAL = GS + b'!\x00'
    SIZE_DOUBLE_HEIGHT = GS + b'!\x01'
    SIZE_DOUBLE_WIDTH = GS + b'!\x10'
    SIZE_DOUBLE = GS + b'!\x11'

    # Emphasis (ESC E n) and underline (ESC - n)
    BOLD_ON = ESC + b'E\x01'
    BOLD_OFF = ESC + b'E\x00'
    UNDERLINE_ON = ESC + b'-\x01'
    UNDERLINE_OFF = ESC + b'-\x00'

    LINE_FEED = LF

    # Feed 3 lines then partial cut (GS V 65 n)
    CUT_PAPER = GS + b'V\x41\x03'

    # Pulse drawer pin 2: 25 x 2ms on, 250 x 2ms off (ESC p m t1 t2)
    DRAWER_KICK = ESC + b'p\x00\x19\xfa'

    def __bytes__(self) -> bytes:
        return self.value


def feed_lines(lines: int) -> bytes:
    """Print and feed ``lines`` lines (ESC d n)."""
    if not 0 <= lines <= 255:
        raise ValueError(f"Feed must be 0-255 lines, got {lines}")
    return ESC + b'd' + bytes([lines])


def raster_image(width_bytes: int, height: int, data: bytes) -> bytes:
    """Print a raster bit image in normal density (GS v 0 m xL xH yL yH d...)."""
    if len(data) != width_bytes * height:
        raise ValueError(
            f"Raster data is {len(data)} bytes, expected {width_bytes * height}"
        )
    return (
        GS + b'v0'
        + b'\x00'
        + bytes([width_bytes & 0xFF, (width_bytes >> 8) & 0xFF])
        + bytes([height & 0xFF, (height >> 8) & 0xFF])
        + data
    )
