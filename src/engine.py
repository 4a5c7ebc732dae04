import csv
import logging
from typing import Dict, Iterable, Optional

from models import InvalidTransactionError, ProcessingStats, Transaction, validate
from state import Ledger

logger = logging.getLogger(__name__)

FIELDS = ("type", "client", "tx", "amount")


class PaymentsEngine:
    """
    Replays transactions against a ledger, strictly in input order.
    Rejected transactions are logged and skipped; a malformed row aborts the run.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger if ledger is not None else Ledger()
        self._stats = ProcessingStats()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Ledger:
        """Process CSV file and return the resulting ledger."""
        logger.info(f"Processing {filepath}")

        # utf-8-sig drops a leading byte order mark from the header
        with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            try:
                if reader.fieldnames is None:
                    logger.warning(f"{filepath} is empty")
                    return self._ledger

                reader.fieldnames = [name.strip() for name in reader.fieldnames]
                missing = [name for name in FIELDS if name not in reader.fieldnames]
                if missing:
                    raise InvalidTransactionError(f"{filepath}: header is missing columns {missing}")

                for row in reader:
                    transaction = self._parse_csv_row(row, f"line {reader.line_num}")
                    self.process_transaction(transaction)
            except (csv.Error, UnicodeDecodeError) as e:
                raise InvalidTransactionError(f"{filepath}: near line {reader.line_num}: {e}") from e

        logger.info(f"Processed: {self._stats.processed}, Failed: {self._stats.failed}")
        return self._ledger

    def process_rows(self, rows: Iterable[Dict[str, str]]) -> Ledger:
        """Process already-read rows keyed by column name."""
        for index, row in enumerate(rows, start=1):
            self.process_transaction(self._parse_csv_row(row, f"row {index}"))
        return self._ledger

    def process_transaction(self, transaction: Transaction) -> None:
        result = self._ledger.apply(transaction)
        self._stats.record(result)
        if not result.is_success:
            logger.info(f"Rejected {transaction}: {result.value}")

    def _parse_csv_row(self, row: Dict[Optional[str], Optional[str]], location: str) -> Transaction:
        """Parse CSV row into Transaction."""
        # DictReader files surplus values under None and pads short rows with None
        if None in row:
            raise InvalidTransactionError(f"{location}: too many fields")

        normalized = {k.strip(): v for k, v in row.items()}
        if any(normalized.get(name) is None for name in FIELDS):
            raise InvalidTransactionError(f"{location}: too few fields")
        normalized = {name: normalized[name].strip() for name in FIELDS}

        try:
            client_id = int(normalized["client"])
            transaction_id = int(normalized["tx"])
        except ValueError as e:
            raise InvalidTransactionError(f"{location}: {e}") from None

        try:
            return validate(
                normalized["type"],
                client_id=client_id,
                transaction_id=transaction_id,
                amount=normalized["amount"],
            )
        except InvalidTransactionError as e:
            raise type(e)(f"{location}: {e}") from None
