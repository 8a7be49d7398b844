"""Command line tool for PromptPay payloads and receipt streams.

Usage:
    python -m promptslip qr [target] [--amount N] [--image out.png] [--raster out.bin]
    python -m promptslip receipt <data.json> [-o out.bin] [--paper 80mm] [--open-drawer]
    python -m promptslip preview <data.json> [--paper 80mm]

Examples:
    python -m promptslip qr 081-234-5678 --amount 100
    python -m promptslip receipt sale.json -o /dev/usb/lp0
    python -m promptslip preview sale.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from promptslip.config import get_paper_profile, get_settings
from promptslip.errors import PromptSlipError
from promptslip.payment import encode_payload
from promptslip.printing.receipt import ReceiptData, ReceiptEncoder

logger = logging.getLogger("promptslip")


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def _load_receipt(path: str) -> ReceiptData:
    with open(path, encoding="utf-8") as f:
        return ReceiptData.from_dict(json.load(f))


def _encoder(args: argparse.Namespace) -> ReceiptEncoder:
    settings = get_settings()
    paper = get_paper_profile(args.paper or settings.paper)
    return ReceiptEncoder(paper=paper, settings=settings)


def cmd_qr(args: argparse.Namespace) -> int:
    """Print a PromptPay payload, optionally saving its QR image."""
    target = args.target or get_settings().merchant_target
    payload = encode_payload(target, args.amount)
    print(payload)

    if args.image:
        from promptslip.payment.qr_image import render_qr_image
        render_qr_image(payload).save(args.image)
        logger.info(f"QR image saved to {args.image}")

    if args.raster:
        from promptslip.payment.qr_image import qr_raster_commands
        caption = f"{args.amount} THB" if args.amount is not None else None
        paper = get_paper_profile(get_settings().paper)
        Path(args.raster).write_bytes(qr_raster_commands(payload, caption=caption, columns=paper.columns))
        logger.info(f"QR slip saved to {args.raster}")

    return 0


def cmd_receipt(args: argparse.Namespace) -> int:
    """Encode a receipt JSON file to ESC/POS bytes."""
    data = _load_receipt(args.path)
    raw = _encoder(args).encode(data, open_drawer=args.open_drawer)

    if args.output == "-":
        sys.stdout.buffer.write(raw)
        sys.stdout.buffer.flush()
    else:
        Path(args.output).write_bytes(raw)
        logger.info(f"Receipt {data.receipt_no}: {len(raw)} bytes written to {args.output}")
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    """Show a plain-text preview of a receipt JSON file."""
    print(_encoder(args).preview(_load_receipt(args.path)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptslip",
        description="PromptPay QR payloads and thermal receipt streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # qr command
    p_qr = subparsers.add_parser('qr', help='Build a PromptPay QR payload')
    p_qr.add_argument('target', nargs='?', help='Mobile number or tax ID (default: PROMPTSLIP_MERCHANT_TARGET)')
    p_qr.add_argument('--amount', help='Amount in THB, omit for an open amount')
    p_qr.add_argument('--image', help='Save the QR code as an image')
    p_qr.add_argument('--raster', help='Save an ESC/POS slip printing the QR code')
    p_qr.set_defaults(func=cmd_qr)

    # receipt command
    p_receipt = subparsers.add_parser('receipt', help='Encode a receipt to ESC/POS bytes')
    p_receipt.add_argument('path', help='Receipt JSON file')
    p_receipt.add_argument('-o', '--output', default='-', help='Output file (default: stdout)')
    p_receipt.add_argument('--paper', choices=['58mm', '80mm'], help='Paper width')
    p_receipt.add_argument('--open-drawer', action='store_true', help='Kick the cash drawer after cutting')
    p_receipt.set_defaults(func=cmd_receipt)

    # preview command
    p_preview = subparsers.add_parser('preview', help='Preview a receipt as plain text')
    p_preview.add_argument('path', help='Receipt JSON file')
    p_preview.add_argument('--paper', choices=['58mm', '80mm'], help='Paper width')
    p_preview.set_defaults(func=cmd_preview)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.debug or get_settings().debug)

    try:
        return args.func(args)
    except PromptSlipError as e:
        logger.error(str(e))
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read input: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
