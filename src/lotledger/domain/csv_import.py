"""CSV import domain service."""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from lotledger.config import Settings, get_settings
from lotledger.database.base import Database
from lotledger.domain.classification import CashEquivalentPolicy
from lotledger.domain.csv_parser import parse_transactions_csv
from lotledger.domain.entities import ImportResult
from lotledger.domain.errors import DomainError, ValidationError, content_too_large
from lotledger.domain.reconciler import LedgerReconciler
from lotledger.domain.transaction_mapper import TransactionMapper
from lotledger.utils.logging import get_logger

logger = get_logger(__name__)


class CSVImportService:
    """Service for importing brokerage transaction exports.

    An import moves through parsing, mapping and reconciling. Parse and
    mapping failures reject the whole file before any lot or deposit is
    written; reconciliation failures are reported per item.
    """

    def __init__(
        self,
        db: Database,
        settings: Optional[Settings] = None,
        cash_equivalents: Optional[Iterable[str]] = None,
    ):
        """Initialize CSV import service.

        Args:
            db: Database instance
            settings: Settings; read from the environment when omitted
            cash_equivalents: Overrides settings.cash_equivalent_symbols
        """
        self.db = db
        self.settings = settings if settings is not None else get_settings()
        if cash_equivalents is None:
            cash_equivalents = self.settings.cash_equivalent_symbols
        self.mapper = TransactionMapper(
            db,
            cash_equivalents=CashEquivalentPolicy(cash_equivalents),
            default_risk_group=self.settings.default_risk_group,
        )
        self.reconciler = LedgerReconciler(db)

    def import_transactions(self, csv_content: str) -> ImportResult:
        """Import transactions from CSV text.

        Args:
            csv_content: Export file content with any byte-order mark removed

        Returns:
            ImportResult; success is False whenever errors is non-empty
        """
        try:
            rows = parse_transactions_csv(csv_content)
        except DomainError as e:
            logger.warning("Rejected import while parsing: %s", e)
            return ImportResult.rejected(str(e))

        if not rows:
            return ImportResult(success=True, imported=0)

        try:
            mapped = self.mapper.map_rows(rows)
        except DomainError as e:
            logger.warning("Rejected import while mapping: %s", e)
            return ImportResult.rejected(str(e))

        return self.reconciler.reconcile(mapped)

    def import_file(self, csv_file_path: str) -> ImportResult:
        """Import transactions from an export file on disk.

        Args:
            csv_file_path: Path to CSV file

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file is larger than the configured limit
                or is not UTF-8 text
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        size = csv_path.stat().st_size
        if size > self.settings.max_import_bytes:
            raise ValidationError(content_too_large(size, self.settings.max_import_bytes))

        try:
            # utf-8-sig drops the byte-order mark exports often start with
            content = csv_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError(f"CSV file is not valid UTF-8: {e}")

        logger.info("Importing %s (%d bytes)", csv_path, size)
        return self.import_transactions(content)
