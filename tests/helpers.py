"""Builders for brokerage export text used across tests."""

from lotledger.domain.csv_parser import WEB_HEADER

CSV_HEADER = ",".join(WEB_HEADER)


def web_row(
    run_date: str,
    action: str,
    symbol: str,
    description: str = "",
    price: str = "",
    quantity: str = "",
    amount: str = "",
    account: str = "My Brokerage",
) -> str:
    """Build one 14-column web export line."""
    return ",".join(
        [
            run_date,
            account,
            "12345678",
            action,
            symbol,
            description,
            "Cash",
            price,
            quantity,
            "",
            "",
            "",
            amount,
            run_date,
        ]
    )


def export_csv(*lines: str) -> str:
    """Join a header and data lines into export text."""
    return "\n".join([CSV_HEADER, *lines]) + "\n"
