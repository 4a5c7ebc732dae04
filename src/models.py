import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from money import to_money

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


class InvalidTransactionError(ValueError):
    """A row that cannot be turned into a Transaction. Fatal for the whole run."""


class UnrecognizedTypeError(InvalidTransactionError):
    pass


class MissingAmountError(InvalidTransactionError):
    pass


class InvalidAmountError(InvalidTransactionError):
    pass


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ProcessingResult(Enum):
    SUCCESS = "success"
    DUPLICATE_TRANSACTION = "duplicate_transaction"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    ALREADY_DISPUTED = "already_disputed"
    NOT_DISPUTED = "not_disputed"
    ACCOUNT_LOCKED = "account_locked"

    @property
    def is_success(self) -> bool:
        return self is ProcessingResult.SUCCESS


@dataclass(frozen=True)
class Deposit:
    amount: int


@dataclass(frozen=True)
class Withdrawal:
    amount: int


@dataclass(frozen=True)
class Dispute:
    pass


@dataclass(frozen=True)
class Resolve:
    pass


@dataclass(frozen=True)
class ChargeBack:
    pass


Action = Union[Deposit, Withdrawal, Dispute, Resolve, ChargeBack]


@dataclass(frozen=True)
class Transaction:
    client_id: int
    transaction_id: int
    action: Action

    def __repr__(self) -> str:
        return f"Transaction({self.action}, client={self.client_id}, tx={self.transaction_id})"


def validate(
    transaction_type: str,
    client_id: int,
    transaction_id: int,
    amount: Optional[str] = None,
) -> Transaction:
    """
    Convert the fields of a raw input row into a validated Transaction.

    The type must match exactly (case-sensitive). Deposits and withdrawals
    require a non-negative amount; an amount given for a dispute, resolve or
    chargeback is ignored.

    Raises:
        UnrecognizedTypeError: unknown transaction type
        MissingAmountError: deposit or withdrawal without an amount
        InvalidAmountError: amount is not a non-negative decimal
        InvalidTransactionError: client or tx id out of range
    """
    if not 0 <= client_id <= MAX_CLIENT_ID:
        raise InvalidTransactionError(f"client id out of range: {client_id}")
    if not 0 <= transaction_id <= MAX_TRANSACTION_ID:
        raise InvalidTransactionError(f"tx id out of range: {transaction_id}")

    try:
        transaction_type = TransactionType(transaction_type)
    except ValueError:
        raise UnrecognizedTypeError(f"unrecognized transaction type: {transaction_type!r}") from None

    match transaction_type:
        case TransactionType.DEPOSIT:
            action = Deposit(_required_amount(transaction_type, transaction_id, amount))
        case TransactionType.WITHDRAWAL:
            action = Withdrawal(_required_amount(transaction_type, transaction_id, amount))
        case TransactionType.DISPUTE:
            action = Dispute()
        case TransactionType.RESOLVE:
            action = Resolve()
        case TransactionType.CHARGEBACK:
            action = ChargeBack()

    if amount and isinstance(action, (Dispute, Resolve, ChargeBack)):
        logger.debug(f"{transaction_type.value} tx {transaction_id}: ignoring amount {amount!r}")

    return Transaction(client_id=client_id, transaction_id=transaction_id, action=action)


def _required_amount(transaction_type: TransactionType, transaction_id: int, amount: Optional[str]) -> int:
    if not amount:
        raise MissingAmountError(f"{transaction_type.value} tx {transaction_id}: missing amount")

    try:
        value = to_money(amount)
    except ValueError as e:
        raise InvalidAmountError(f"{transaction_type.value} tx {transaction_id}: {e}") from None

    if value < 0:
        raise InvalidAmountError(f"{transaction_type.value} tx {transaction_id}: negative amount {amount!r}")
    return value


@dataclass
class DepositRecord:
    """An applied deposit, kept so it can later be disputed."""

    amount: int
    under_dispute: bool = False


@dataclass
class ClientAccount:
    """
    Balances of a single client, in fixed-point money.

    While the account is unlocked, held equals the sum of the amounts of all
    deposits under dispute. A chargeback locks the account and no longer keeps
    the two in step.
    """

    client_id: int
    available: int = 0
    held: int = 0
    locked: bool = False
    deposits: Dict[int, DepositRecord] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.available + self.held

    def credit(self, amount: int) -> None:
        self.available += amount

    def debit(self, amount: int) -> None:
        self.available -= amount

    def hold(self, amount: int) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: int) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: int) -> None:
        self.held -= amount


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.rejections: Counter = Counter()

    def record(self, result: ProcessingResult) -> None:
        if result.is_success:
            self.processed += 1
        else:
            self.failed += 1
            self.rejections[result] += 1
