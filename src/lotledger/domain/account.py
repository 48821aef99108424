"""Account domain service."""

from typing import Optional
from lotledger.database.base import Database
from lotledger.domain.entities import Account as AccountEntity
from lotledger.domain.errors import ConflictError, NotFoundError, ResolutionError, unresolved_account
from lotledger.utils.logging import get_logger

logger = get_logger(__name__)


class AccountService:
    """Service for managing brokerage accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str) -> int:
        """Create a new account.

        Args:
            name: Account name, exactly as it appears in exports

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
        """
        if self.db.get_account_by_name(name) is not None:
            raise ConflictError(f"Account with name '{name}' already exists")
        return self.db.create_account(name=name)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID."""
        return self.db.get_account(account_id)

    def get_account_by_name(self, name: str) -> AccountEntity:
        """Get account by exact name.

        Raises:
            NotFoundError: If no account has that name
        """
        account = self.db.get_account_by_name(name)
        if account is None:
            raise NotFoundError(f"Account '{name}' not found")
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def find_or_create(self, name: str) -> int:
        """Return the ID of the named account, creating it on first encounter.

        Names match exactly and case-sensitively.

        Raises:
            ResolutionError: If the account is still missing after creation
        """
        account = self.db.get_account_by_name(name)
        if account is not None:
            return account.id

        logger.info("Creating account '%s'", name)
        self.db.create_account(name=name)
        account = self.db.get_account_by_name(name)
        if account is None:
            raise ResolutionError(unresolved_account(name))
        return account.id
