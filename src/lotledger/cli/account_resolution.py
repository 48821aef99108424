"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from lotledger.domain.account import AccountService
from lotledger.domain.errors import NotFoundError
from lotledger.cli.error_handling import handle_domain_error


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | None
) -> int | None:
    """Resolve an account name to its ID, or exit with a CLI error.

    Returns None when no account filter was given.
    """
    if account is None:
        return None
    try:
        return account_service.get_account_by_name(account).id
    except NotFoundError as exc:
        handle_domain_error(ctx, exc)
