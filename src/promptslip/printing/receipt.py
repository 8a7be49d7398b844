"""Sale receipt encoder for thermal printers.

Turns a completed sale into the ESC/POS stream for a fixed receipt layout:

    header       shop name (double size), address, phone, tax ID
    info         receipt number, date, cashier
    items        name / qty x price / line total table
    totals       subtotal, discount, VAT, grand total (bold, double size)
    payment      method, amount tendered, change
    loyalty      points earned and balance (members only)
    footer       thank-you line, feed and cut
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional, Union

from promptslip.config import PaperProfile, Settings, get_paper_profile, get_settings
from promptslip.errors import InvalidAmount, MissingRequiredModelField
from promptslip.printing.commands import Command
from promptslip.printing.layout import LayoutEngine, ReceiptLayout
from promptslip.printing.text import columns, pad_end, pad_start, truncate, LEFT, RIGHT

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

# Thai labels
LABEL_RECEIPT_NO = "เลขที่"
LABEL_DATE = "วันที่"
LABEL_CASHIER = "พนักงาน"
LABEL_ITEM = "รายการ"
LABEL_QTY = "จำนวน"
LABEL_AMOUNT = "รวม"
LABEL_SUBTOTAL = "รวมสินค้า"
LABEL_DISCOUNT = "ส่วนลด"
LABEL_VAT = "VAT 7%"
LABEL_TOTAL = "รวมทั้งสิ้น"
LABEL_PAID_BY = "ชำระโดย"
LABEL_TENDERED = "รับเงิน"
LABEL_CHANGE = "เงินทอน"
LABEL_POINTS_EARNED = "แต้มที่ได้รับ"
LABEL_POINTS_BALANCE = "แต้มสะสม"
THANK_YOU = "ขอบคุณที่ใช้บริการ"

_CENTS = Decimal("0.01")


def format_money(value: Number) -> str:
    """Two fraction digits, rounded half-up: ``12.5`` -> ``"12.50"``."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    try:
        return f"{amount.quantize(_CENTS, rounding=ROUND_HALF_UP):f}"
    except InvalidOperation:
        raise InvalidAmount(value, "too large") from None


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a JSON number or numeric string to Decimal; None passes through."""
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidAmount(value)
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(value) from None


def format_number(value: Number) -> str:
    """Shortest plain rendering: ``2.0`` -> ``"2"``, ``12.50`` -> ``"12.5"``."""
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if number == number.to_integral_value():
        return str(int(number))
    return f"{number.normalize():f}"


@dataclass
class LineItem:
    """One sold product line."""

    name: str
    qty: Number
    unit_price: Number
    line_total: Number


@dataclass
class ReceiptData:
    """Everything printed on a sale receipt."""

    shop_name: str
    receipt_no: str
    date: str
    cashier: str
    items: List[LineItem]
    subtotal: Number
    total: Number
    payment_method: str

    shop_address: Optional[str] = None
    shop_phone: Optional[str] = None
    tax_id: Optional[str] = None

    discount: Optional[Number] = None
    vat: Optional[Number] = None

    amount_paid: Optional[Number] = None
    change: Optional[Number] = None

    points_earned: Optional[int] = None
    points_balance: Optional[int] = None

    def validate(self) -> None:
        """Raise MissingRequiredModelField if the receipt cannot be printed."""
        if not self.shop_name:
            raise MissingRequiredModelField("shop_name")
        if not self.receipt_no:
            raise MissingRequiredModelField("receipt_no")
        if not self.items:
            raise MissingRequiredModelField("items")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReceiptData":
        """Build from a JSON-style mapping.

        Accepts the camelCase keys of the sales API (``shopName``,
        ``receiptNo``, ``amountPaid``, ``memberPoints``...) as well as the
        snake_case field names.
        """
        def pick(*keys: str, required: bool = False) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            if required:
                raise MissingRequiredModelField(keys[0])
            return None

        items = [
            LineItem(
                name=str(item.get("name") or ""),
                qty=to_decimal(item.get("qty", 0)),
                unit_price=to_decimal(item.get("unit_price", item.get("price", 0))),
                line_total=to_decimal(item.get("line_total", item.get("total", 0))),
            )
            for item in pick("items") or []
        ]

        return cls(
            shop_name=pick("shop_name", "shopName", required=True),
            receipt_no=pick("receipt_no", "receiptNo", required=True),
            date=pick("date") or "",
            cashier=pick("cashier") or "",
            items=items,
            subtotal=to_decimal(pick("subtotal", required=True)),
            total=to_decimal(pick("total", required=True)),
            payment_method=pick("payment_method", "paymentMethod") or "",
            shop_address=pick("shop_address", "shopAddress"),
            shop_phone=pick("shop_phone", "shopPhone"),
            tax_id=pick("tax_id", "taxId"),
            discount=to_decimal(pick("discount")),
            vat=to_decimal(pick("vat")),
            amount_paid=to_decimal(pick("amount_paid", "amountPaid")),
            change=to_decimal(pick("change")),
            points_earned=pick("points_earned", "pointsEarned"),
            points_balance=pick("points_balance", "pointsBalance", "memberPoints"),
        )


@dataclass
class Receipt:
    """An encoded receipt ready for the printer transport."""

    receipt_no: str
    layout: ReceiptLayout
    raw_commands: bytes
    preview: str


class ReceiptEncoder:
    """Encoder for sale receipts.

    Holds only immutable configuration, so one instance can serve any
    number of concurrent requests.
    """

    def __init__(
        self,
        paper: Optional[PaperProfile] = None,
        codec: Optional[str] = None,
        feed: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        if paper is None or codec is None or feed is None:
            settings = settings or get_settings()
        self.paper = paper or get_paper_profile(settings.paper)
        self.feed = feed if feed is not None else settings.feed_lines
        self._layout_engine = LayoutEngine(codec=codec or settings.codec)

    def encode(self, data: ReceiptData, open_drawer: bool = False) -> bytes:
        """Encode a receipt to ESC/POS bytes.

        Args:
            data: The completed sale
            open_drawer: Kick the cash drawer after the cut

        Raises:
            MissingRequiredModelField: if shop name, receipt number or items are missing
        """
        layout = self.build_layout(data, open_drawer=open_drawer)
        return self._layout_engine.render(layout)

    def generate(self, data: ReceiptData, open_drawer: bool = False) -> Receipt:
        """Encode a receipt and its plain-text preview."""
        layout = self.build_layout(data, open_drawer=open_drawer)
        return Receipt(
            receipt_no=data.receipt_no,
            layout=layout,
            raw_commands=self._layout_engine.render(layout),
            preview=self._layout_engine.preview_text(layout),
        )

    def preview(self, data: ReceiptData) -> str:
        """Plain-text preview without control codes."""
        return self._layout_engine.preview_text(self.build_layout(data))

    def build_layout(self, data: ReceiptData, open_drawer: bool = False) -> ReceiptLayout:
        """Compose the receipt blocks in print order."""
        data.validate()

        layout = ReceiptLayout(columns=self.paper.columns)
        layout.add_command(Command.INIT, Command.CODEPAGE_THAI)

        self._add_header(layout, data)
        self._add_info(layout, data)
        self._add_items(layout, data)
        self._add_totals(layout, data)
        self._add_payment(layout, data)
        self._add_loyalty(layout, data)
        self._add_footer(layout)

        layout.add_feed(self.feed)
        layout.add_command(Command.CUT_PAPER)
        if open_drawer:
            layout.add_command(Command.DRAWER_KICK)

        logger.debug(
            f"Receipt {data.receipt_no}: {len(data.items)} items, "
            f"{len(layout.blocks)} blocks on {self.paper.name} paper"
        )
        return layout

    def _add_header(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        layout.add_command(Command.ALIGN_CENTER, Command.SIZE_DOUBLE)
        layout.add_text(data.shop_name, width=self.paper.half)
        layout.add_command(Command.SIZE_NORMAL)
        if data.shop_address:
            layout.add_text(data.shop_address)
        if data.shop_phone:
            layout.add_text(f"Tel: {data.shop_phone}")
        if data.tax_id:
            layout.add_text(f"Tax ID: {data.tax_id}")
        layout.add_blank()
        layout.add_rule("heavy")

    def _add_info(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        layout.add_command(Command.ALIGN_LEFT)
        layout.add_text(f"{LABEL_RECEIPT_NO}: {data.receipt_no}")
        layout.add_text(f"{LABEL_DATE}: {data.date}")
        layout.add_text(f"{LABEL_CASHIER}: {data.cashier}")
        layout.add_rule("light")

    def _add_items(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        paper = self.paper

        layout.add_command(Command.BOLD_ON)
        layout.add_text(columns(
            (LABEL_ITEM, paper.name_width, LEFT),
            (LABEL_QTY, paper.qty_width, RIGHT),
            (LABEL_AMOUNT, paper.total_width, RIGHT),
        ))
        layout.add_command(Command.BOLD_OFF)
        layout.add_rule("light")

        for item in data.items:
            layout.add_text(
                pad_end(truncate(item.name, paper.name_width), paper.name_width)
                + pad_start(f"{format_number(item.qty)}x{format_number(item.unit_price)}", paper.qty_width)
                + pad_start(format_money(item.line_total), paper.total_width)
            )

        layout.add_rule("light")

    def _add_totals(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        layout.add_text(self._amount_row(LABEL_SUBTOTAL, format_money(data.subtotal)))
        if data.discount and data.discount > 0:
            layout.add_text(self._amount_row(LABEL_DISCOUNT, f"-{format_money(data.discount)}"))
        if data.vat is not None:
            layout.add_text(self._amount_row(LABEL_VAT, format_money(data.vat)))

        half = self.paper.half
        layout.add_command(Command.BOLD_ON, Command.SIZE_DOUBLE)
        layout.add_text(
            pad_end(LABEL_TOTAL, half)
            + pad_start(format_money(data.total), self.paper.columns - half)
        )
        layout.add_command(Command.SIZE_NORMAL, Command.BOLD_OFF)
        layout.add_rule("light")

    def _add_payment(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        layout.add_text(f"{LABEL_PAID_BY}: {data.payment_method}")
        if data.amount_paid is not None:
            layout.add_text(self._amount_row(LABEL_TENDERED, format_money(data.amount_paid)))
        if data.change and data.change > 0:
            layout.add_text(self._amount_row(LABEL_CHANGE, format_money(data.change)))

    def _add_loyalty(self, layout: ReceiptLayout, data: ReceiptData) -> None:
        if data.points_earned is None:
            return
        layout.add_blank()
        layout.add_text(f"{LABEL_POINTS_EARNED}: +{data.points_earned}")
        if data.points_balance is not None:
            layout.add_text(f"{LABEL_POINTS_BALANCE}: {data.points_balance}")

    def _add_footer(self, layout: ReceiptLayout) -> None:
        layout.add_blank()
        layout.add_rule("heavy")
        layout.add_command(Command.ALIGN_CENTER)
        layout.add_text(THANK_YOU)
        layout.add_blank()

    def _amount_row(self, label: str, amount: str) -> str:
        return pad_end(label, self.paper.label_width) + pad_start(amount, self.paper.total_width)


def encode_receipt(
    data: Union[ReceiptData, Dict[str, Any]],
    paper: Optional[PaperProfile] = None,
    open_drawer: bool = False,
) -> bytes:
    """Encode a receipt with default settings.

    Args:
        data: ReceiptData or a JSON-style mapping (see ReceiptData.from_dict)
        paper: Paper profile, defaults to the configured one
        open_drawer: Kick the cash drawer after the cut

    Returns:
        ESC/POS command bytes for the printer transport
    """
    if not isinstance(data, ReceiptData):
        data = ReceiptData.from_dict(data)
    return ReceiptEncoder(paper=paper).encode(data, open_drawer=open_drawer)
