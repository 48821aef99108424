"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FormatError(DomainError):
    """Malformed CSV structure: header mismatch, column count, bad number."""


class ResolutionError(DomainError):
    """A row could not be resolved against reference data."""


class ReconciliationError(DomainError):
    """A mapped item could not be applied to the ledger."""


def header_mismatch(expected: list[str], actual: list[str]) -> str:
    """Return message for an unrecognised CSV header."""
    return (
        "Invalid CSV header: expected columns "
        f"'{','.join(expected)}' but got '{','.join(actual)}'"
    )


def column_count_mismatch(row_num: int, expected: int, actual: int) -> str:
    """Return message for a data row with the wrong number of fields."""
    return f"Row {row_num}: expected {expected} columns but got {actual}"


def invalid_number(field: str, row_num: int, value: str) -> str:
    """Return message for a numeric field that does not parse."""
    return f"Row {row_num}: invalid {field}: expected a number but got \"{value}\""


def invalid_date(date_str: str) -> str:
    """Return message for a date not in MM/DD/YYYY form."""
    return f'Invalid date format: "{date_str}" (expected MM/DD/YYYY)'


def unresolved_account(name: str) -> str:
    """Return message when an account can neither be found nor created."""
    return f"Account '{name}' could not be found or created"


def negative_purchase_quantity(symbol: str, quantity: Decimal) -> str:
    """Return message for a purchase row with a negative quantity."""
    return f"Purchase of {symbol} has negative quantity {quantity}"


def no_open_lots(account_name: str, symbol: str, quantity: Decimal) -> str:
    """Return message when a sale has no open lots to match."""
    return (
        f"No open lots found for sale: account={account_name}, "
        f"symbol={symbol}, quantity={quantity}"
    )


def insufficient_open_quantity(
    account_name: str, symbol: str, quantity: Decimal, open_quantity: Decimal
) -> str:
    """Return message when open lots cannot cover a sale."""
    return (
        f"Insufficient open quantity for sale: account={account_name}, "
        f"symbol={symbol}, quantity={quantity}, open={open_quantity}"
    )


def content_too_large(size: int, limit: int) -> str:
    """Return message for an import file over the size limit."""
    return f"Import content is {size} bytes; the maximum is {limit} bytes"


def unknown_transaction(action: str, symbol: str, txn_date: str | date) -> str:
    """Return warning text for a row whose action is not recognised."""
    return f'Unknown transaction type "{action}" for symbol {symbol} on {txn_date}'
