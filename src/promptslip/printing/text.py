"""Fixed-width text layout for receipt columns.

Every helper counts one display column per character.
"""

from typing import Tuple

ELLIPSIS = ".."

LEFT = "left"
CENTER = "center"
RIGHT = "right"


def pad_end(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` columns, clipping overflow."""
    if width <= 0:
        return ""
    return text.ljust(width)[:width]


def pad_start(text: str, width: int) -> str:
    """Right-align ``text`` in ``width`` columns, keeping the rightmost part."""
    if width <= 0:
        return ""
    return text.rjust(width)[-width:]


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` columns with a trailing ``..``."""
    if len(text) <= width:
        return text
    if width <= len(ELLIPSIS):
        return text[:max(width, 0)]
    return text[:width - len(ELLIPSIS)] + ELLIPSIS


def fit(text: str, width: int, align: str = LEFT) -> str:
    """Pad or clip ``text`` to exactly ``width`` columns.

    ``align`` is ``"left"``, ``"center"`` or ``"right"``.
    """
    if align == CENTER:
        return text.center(width)[:width] if width > 0 else ""
    if align == RIGHT:
        return pad_start(text, width)
    if align == LEFT:
        return pad_end(text, width)
    raise ValueError(f"Unknown alignment: {align!r}")


def columns(*cells: Tuple[str, int, str]) -> str:
    """Join ``(text, width, align)`` cells into one fixed-width row.

    ``align`` is ``"left"`` or ``"right"``.
    """
    row = []
    for text, width, align in cells:
        if align == RIGHT:
            row.append(pad_start(text, width))
        elif align == LEFT:
            row.append(pad_end(text, width))
        else:
            raise ValueError(f"Unknown column alignment: {align!r}")
    return "".join(row)
