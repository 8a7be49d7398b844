"""
Paper profiles for thermal receipt printers.

Column widths are in characters of the printer's normal-size font.
"""

from dataclasses import dataclass
from typing import Dict

from promptslip.errors import UnknownPaperProfile


@dataclass(frozen=True)
class PaperProfile:
    """Character grid of one paper width.

    The item table is split into a name column, a quantity column and a
    line-total column that together span the full width.
    """
    name: str
    columns: int
    name_width: int
    qty_width: int
    total_width: int

    def __post_init__(self) -> None:
        used = self.name_width + self.qty_width + self.total_width
        if used != self.columns:
            raise ValueError(
                f"Paper profile {self.name!r}: column widths sum to {used}, "
                f"expected {self.columns}"
            )

    @property
    def label_width(self) -> int:
        """Width of the label cell in a totals row."""
        return self.name_width + self.qty_width

    @property
    def half(self) -> int:
        """Width of the label cell in the two-column grand total row."""
        return self.columns // 2


PAPER_58MM = PaperProfile(name="58mm", columns=32, name_width=16, qty_width=8, total_width=8)
PAPER_80MM = PaperProfile(name="80mm", columns=48, name_width=28, qty_width=10, total_width=10)

PAPER_PROFILES: Dict[str, PaperProfile] = {
    PAPER_58MM.name: PAPER_58MM,
    PAPER_80MM.name: PAPER_80MM,
}


def get_paper_profile(name: str) -> PaperProfile:
    """Look up a paper profile by name ("58mm", "80mm")."""
    try:
        return PAPER_PROFILES[name]
    except KeyError:
        raise UnknownPaperProfile(name) from None
