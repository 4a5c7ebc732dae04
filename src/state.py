from dataclasses import dataclass
from typing import Dict, List, Optional

from models import ClientAccount, ProcessingResult, Transaction
from processor import TransactionProcessor


@dataclass(frozen=True)
class AccountSummary:
    client_id: int
    available: int
    held: int
    total: int
    locked: bool


class Ledger:
    """
    State of all known client accounts.
    Accounts are created on the first transaction for a client and never removed.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._processor = TransactionProcessor()

    def __len__(self) -> int:
        return len(self._accounts)

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        """Retrieve account without creating it."""
        return self._accounts.get(client_id)

    def apply(self, transaction: Transaction) -> ProcessingResult:
        """Route the transaction to its client's account and apply it there."""
        account = self.get_or_create_account(transaction.client_id)
        return self._processor.process_transaction(account, transaction)

    def summary(self) -> List[AccountSummary]:
        """Return one row per account, ordered by client id."""
        return [
            AccountSummary(
                client_id=account.client_id,
                available=account.available,
                held=account.held,
                total=account.total,
                locked=account.locked,
            )
            for _, account in sorted(self._accounts.items())
        ]
