"""Parser for brokerage transaction exports.

Two export layouts are recognised, each by an exact, order-sensitive match
on the header row. The web export is the primary format; the desktop
export names its columns differently, stores the action text in
"Description" and writes dates as ``Dec-31-2025``.
"""

import csv
import io
from dataclasses import dataclass
from decimal import Decimal

from lotledger.domain.entities import RawCsvRow
from lotledger.domain.errors import (
    FormatError,
    header_mismatch,
    column_count_mismatch,
    invalid_number,
)
from lotledger.utils.amount_parser import parse_amount
from lotledger.utils.csv_tokenizer import tokenize_csv
from lotledger.utils.date_parser import normalize_desktop_date
from lotledger.utils.logging import get_logger

logger = get_logger(__name__)

WEB_HEADER = [
    "Run Date",
    "Account",
    "Account Number",
    "Action",
    "Symbol",
    "Description",
    "Type",
    "Price ($)",
    "Quantity",
    "Commission ($)",
    "Fees ($)",
    "Accrued Interest ($)",
    "Amount ($)",
    "Settlement Date",
]

DESKTOP_HEADER = [
    "Date",
    "Description",
    "Symbol",
    "Quantity",
    "Price",
    "Amount",
    "Cash Balance",
    "Security Description",
    "Commission",
    "Fees",
    "Account",
]


@dataclass(frozen=True)
class ExportLayout:
    """Column positions of the fields a RawCsvRow is built from."""

    name: str
    header: list[str]
    date: int
    account: int
    action: int
    symbol: int
    description: int
    price: int
    quantity: int
    amount: int
    is_desktop: bool = False


WEB_LAYOUT = ExportLayout(
    name="web",
    header=WEB_HEADER,
    date=0,
    account=1,
    action=3,
    symbol=4,
    description=5,
    price=7,
    quantity=8,
    amount=12,
)

DESKTOP_LAYOUT = ExportLayout(
    name="desktop",
    header=DESKTOP_HEADER,
    date=0,
    account=10,
    action=1,
    symbol=2,
    description=7,
    price=4,
    quantity=3,
    amount=5,
    is_desktop=True,
)

LAYOUTS = (WEB_LAYOUT, DESKTOP_LAYOUT)


def detect_layout(header: list[str]) -> ExportLayout:
    """Return the layout whose header matches exactly, in order.

    Raises:
        FormatError: If no known layout matches
    """
    for layout in LAYOUTS:
        if header == layout.header:
            return layout
    raise FormatError(header_mismatch(WEB_HEADER, header))


def _parse_number(value: str, field: str, row_num: int) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError:
        raise FormatError(invalid_number(field, row_num, value))


def _parse_row(fields: list[str], layout: ExportLayout, row_num: int) -> RawCsvRow:
    raw_date = fields[layout.date]
    return RawCsvRow(
        date=normalize_desktop_date(raw_date) if layout.is_desktop else raw_date,
        account=fields[layout.account],
        action=fields[layout.action],
        symbol=fields[layout.symbol],
        description=fields[layout.description],
        quantity=_parse_number(fields[layout.quantity], "quantity", row_num),
        price=_parse_number(fields[layout.price], "price", row_num),
        total_amount=_parse_number(fields[layout.amount], "total amount", row_num),
    )


def parse_transactions_csv(csv_text: str) -> list[RawCsvRow]:
    """Parse a brokerage transaction export into typed rows.

    Args:
        csv_text: Raw file content (any byte-order mark already removed)

    Returns:
        One RawCsvRow per data line, in file order. Empty and header-only
        input both give an empty list.

    Raises:
        FormatError: If the header is not a known layout, a row has the
            wrong number of fields, or a numeric field is not a number
    """
    try:
        rows = tokenize_csv(csv_text)
    except ValueError as e:
        raise FormatError(str(e)) from e
    if not rows:
        return []

    header = [h.strip() for h in rows[0]]
    layout = detect_layout(header)

    parsed = []
    for row_num, fields in enumerate(rows[1:], start=2):  # Header is row 1
        if len(fields) != len(header):
            raise FormatError(column_count_mismatch(row_num, len(header), len(fields)))
        parsed.append(_parse_row([f.strip() for f in fields], layout, row_num))

    logger.info("Parsed %d rows from %s export", len(parsed), layout.name)
    return parsed


def _format_number(value: Decimal) -> str:
    return format(value, "f")


def serialize_transactions_csv(rows: list[RawCsvRow]) -> str:
    """Render rows as a web-layout export that parse_transactions_csv accepts."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(WEB_HEADER)
    for row in rows:
        fields = [""] * len(WEB_HEADER)
        fields[WEB_LAYOUT.date] = row.date
        fields[WEB_LAYOUT.account] = row.account
        fields[WEB_LAYOUT.action] = row.action
        fields[WEB_LAYOUT.symbol] = row.symbol
        fields[WEB_LAYOUT.description] = row.description
        fields[WEB_LAYOUT.price] = _format_number(row.price)
        fields[WEB_LAYOUT.quantity] = _format_number(row.quantity)
        fields[WEB_LAYOUT.amount] = _format_number(row.total_amount)
        writer.writerow(fields)
    return buffer.getvalue()
