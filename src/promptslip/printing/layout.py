"""Layout engine for thermal printer receipts.

A receipt is described as an ordered list of blocks (printer commands,
text lines, rules, paper feeds and raster images) and rendered to an
ESC/POS byte stream, or to a plain-text preview for logs and simulators.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from promptslip.printing.commands import Command, LF, feed_lines, raster_image
from promptslip.printing.text import CENTER, LEFT, RIGHT, fit

logger = logging.getLogger(__name__)

RULE_CHARS = {
    "heavy": "=",
    "light": "-",
}

ALIGNMENTS = {
    Command.ALIGN_LEFT: LEFT,
    Command.ALIGN_CENTER: CENTER,
    Command.ALIGN_RIGHT: RIGHT,
}


@dataclass
class CommandBlock:
    """One or more fixed printer commands."""

    commands: Tuple[Command, ...]


@dataclass
class TextBlock:
    """A single printed line, terminated by LF."""

    text: str


@dataclass
class RuleBlock:
    """A full-width separator line."""

    style: str = "light"  # heavy, light


@dataclass
class FeedBlock:
    """Print-and-feed paper by a number of lines."""

    lines: int = 3


@dataclass
class ImageBlock:
    """A monochrome raster image (PIL image)."""

    image: object
    max_width: int = 384  # dots (58mm paper)


Block = Union[CommandBlock, TextBlock, RuleBlock, FeedBlock, ImageBlock]


@dataclass
class ReceiptLayout:
    """Complete receipt layout definition."""

    columns: int = 32
    blocks: List[Block] = field(default_factory=list)
    alignment: str = LEFT  # set by the last ALIGN_* command

    def add_command(self, *commands: Command) -> "ReceiptLayout":
        """Add printer commands."""
        for cmd in commands:
            self.alignment = ALIGNMENTS.get(cmd, self.alignment)
        self.blocks.append(CommandBlock(commands=tuple(commands)))
        return self

    def add_text(self, text: str, width: Optional[int] = None) -> "ReceiptLayout":
        """Add a text line padded or clipped to the paper width.

        The line is laid out in the current alignment. Pass ``width`` for
        enlarged text, e.g. half the columns under double-width size.
        """
        width = self.columns if width is None else width
        self.blocks.append(TextBlock(text=fit(text, width, self.alignment)))
        return self

    def add_blank(self, lines: int = 1) -> "ReceiptLayout":
        """Add empty lines."""
        for _ in range(lines):
            self.blocks.append(TextBlock(text=""))
        return self

    def add_rule(self, style: str = "light") -> "ReceiptLayout":
        """Add a separator line."""
        if style not in RULE_CHARS:
            raise ValueError(f"Unknown rule style: {style!r}")
        self.blocks.append(RuleBlock(style=style))
        return self

    def add_feed(self, lines: int = 3) -> "ReceiptLayout":
        """Add a paper feed."""
        self.blocks.append(FeedBlock(lines=lines))
        return self

    def add_image(self, image: object, max_width: int = 384) -> "ReceiptLayout":
        """Add a raster image block."""
        self.blocks.append(ImageBlock(image=image, max_width=max_width))
        return self

    def rule_text(self, style: str) -> str:
        return RULE_CHARS[style] * self.columns


class LayoutEngine:
    """Engine for rendering receipt layouts to printer commands.

    Text is encoded with the printer's code page (CP874 for Thai by
    default); characters outside it print as ``?``.
    """

    def __init__(self, codec: str = "cp874"):
        self.codec = codec

    def render(self, layout: ReceiptLayout) -> bytes:
        """Render a receipt layout to printer commands.

        Args:
            layout: The receipt layout to render

        Returns:
            ESC/POS command bytes ready to send to printer
        """
        commands = []

        for block in layout.blocks:
            if isinstance(block, CommandBlock):
                commands.extend(cmd.value for cmd in block.commands)
            elif isinstance(block, TextBlock):
                commands.append(self._encode_text(block.text))
                commands.append(LF)
            elif isinstance(block, RuleBlock):
                commands.append(self._encode_text(layout.rule_text(block.style)))
                commands.append(LF)
            elif isinstance(block, FeedBlock):
                commands.append(feed_lines(block.lines))
            elif isinstance(block, ImageBlock):
                commands.append(self._render_image(block))
            else:
                raise TypeError(f"Unsupported layout block: {type(block).__name__}")

        data = b''.join(commands)
        logger.debug(f"Rendered {len(layout.blocks)} blocks to {len(data)} bytes")
        return data

    def _encode_text(self, text: str) -> bytes:
        return text.encode(self.codec, errors="replace")

    def _render_image(self, block: ImageBlock) -> bytes:
        """Render an image block as a GS v 0 raster image.

        Uses raster bit image mode for best compatibility.
        """
        from PIL import Image

        img = block.image
        if img.width > block.max_width:
            height = max(1, int(img.height * block.max_width / img.width))
            img = img.resize((block.max_width, height), Image.Resampling.NEAREST)
        img = img.convert('1', dither=Image.Dither.NONE)

        # Ensure width is multiple of 8
        width, height = img.size
        if width % 8 != 0:
            new_width = (width // 8 + 1) * 8
            padded = Image.new('1', (new_width, height), 1)  # White background
            padded.paste(img, ((new_width - width) // 2, 0))
            img = padded
            width = new_width

        bytes_per_line = width // 8
        raster = bytearray()
        for y in range(height):
            for x_byte in range(bytes_per_line):
                byte_val = 0
                for bit in range(8):
                    if img.getpixel((x_byte * 8 + bit, y)) == 0:  # Black pixel
                        byte_val |= 0x80 >> bit
                raster.append(byte_val)

        return raster_image(bytes_per_line, height, bytes(raster))

    def preview_text(self, layout: ReceiptLayout) -> str:
        """Generate a text preview of the receipt (for logs and simulators).

        Alignment commands are honoured; size and emphasis are not shown.

        Args:
            layout: The receipt layout to preview

        Returns:
            Boxed plain-text representation of the receipt
        """
        width = layout.columns
        align = Command.ALIGN_LEFT
        lines = ["+" + "-" * width + "+"]

        for block in layout.blocks:
            if isinstance(block, CommandBlock):
                for cmd in block.commands:
                    if cmd in (Command.ALIGN_LEFT, Command.ALIGN_CENTER, Command.ALIGN_RIGHT):
                        align = cmd
            elif isinstance(block, TextBlock):
                lines.append("|" + self._align(block.text[:width], width, align) + "|")
            elif isinstance(block, RuleBlock):
                lines.append("|" + layout.rule_text(block.style) + "|")
            elif isinstance(block, FeedBlock):
                lines.extend("|" + " " * width + "|" for _ in range(block.lines))
            elif isinstance(block, ImageBlock):
                lines.append("|" + "[IMAGE]".center(width) + "|")

        lines.append("+" + "-" * width + "+")
        return "\n".join(lines)

    @staticmethod
    def _align(text: str, width: int, align: Optional[Command]) -> str:
        if align == Command.ALIGN_CENTER:
            return text.center(width)
        if align == Command.ALIGN_RIGHT:
            return text.rjust(width)
        return text.ljust(width)
