"""QR image rendering for PromptPay payloads.

Produces a black-on-white PIL image for customer displays, and the ESC/POS
raster bytes to print the same code on a thermal slip.
"""

import logging
from typing import Optional

import qrcode
from PIL import Image

from promptslip.config import QRSettings, get_settings
from promptslip.printing.commands import Command
from promptslip.printing.layout import LayoutEngine, ReceiptLayout

logger = logging.getLogger(__name__)

ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def render_qr_image(payload: str, settings: Optional[QRSettings] = None) -> Image.Image:
    """Render a payload as a monochrome QR image.

    Args:
        payload: Encoded PromptPay payload
        settings: Module size, quiet zone and error correction

    Returns:
        1-bit PIL image, black modules on white
    """
    settings = settings or get_settings().qr

    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECTION[settings.error_correction],
        box_size=settings.box_size,
        border=settings.border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").convert("1")
    logger.debug(f"QR version {qr.version} rendered at {img.width}x{img.height}")
    return img


def qr_raster_commands(
    payload: str,
    max_width: int = 384,
    settings: Optional[QRSettings] = None,
    caption: Optional[str] = None,
    codec: str = "cp874",
    columns: int = 32,
) -> bytes:
    """ESC/POS bytes printing the payload's QR code centred on a slip.

    Args:
        payload: Encoded PromptPay payload
        max_width: Printable width in dots (384 for 58mm, 576 for 80mm)
        settings: QR rendering settings
        caption: Optional line printed under the code, e.g. the amount
        codec: Printer code page for the caption
        columns: Characters per line, the caption is centred in them
    """
    layout = ReceiptLayout(columns=columns)
    layout.add_command(Command.INIT, Command.CODEPAGE_THAI, Command.ALIGN_CENTER)
    layout.add_image(render_qr_image(payload, settings), max_width=max_width)
    if caption:
        layout.add_text(caption)
    layout.add_feed(3)
    layout.add_command(Command.CUT_PAPER)
    return LayoutEngine(codec=codec).render(layout)
