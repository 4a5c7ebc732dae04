from models import (
    ChargeBack,
    ClientAccount,
    Deposit,
    DepositRecord,
    Dispute,
    ProcessingResult,
    Resolve,
    Transaction,
    Withdrawal,
)


class TransactionProcessor:
    """
    Applies transactions to a single client account.
    Every check runs before any mutation, so a rejected transaction leaves the
    account exactly as it was.
    """

    def process_transaction(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction against the account it belongs to.

        Returns:
            SUCCESS: Applied
            Any other value: Rejected with that reason, account unchanged
        """
        if account.client_id != transaction.client_id:
            raise ValueError(f"{transaction} cannot be applied to client {account.client_id}")

        if account.locked:
            return ProcessingResult.ACCOUNT_LOCKED

        match transaction.action:
            case Deposit(amount=amount):
                return self._handle_deposit(account, transaction.transaction_id, amount)
            case Withdrawal(amount=amount):
                return self._handle_withdrawal(account, transaction.transaction_id, amount)
            case Dispute():
                return self._handle_dispute(account, transaction.transaction_id)
            case Resolve():
                return self._handle_resolve(account, transaction.transaction_id)
            case ChargeBack():
                return self._handle_chargeback(account, transaction.transaction_id)

        raise TypeError(f"unknown action: {transaction.action!r}")

    def _handle_deposit(self, account: ClientAccount, transaction_id: int, amount: int) -> ProcessingResult:
        if transaction_id in account.deposits:
            return ProcessingResult.DUPLICATE_TRANSACTION

        account.credit(amount)
        account.deposits[transaction_id] = DepositRecord(amount=amount)
        return ProcessingResult.SUCCESS

    def _handle_withdrawal(self, account: ClientAccount, transaction_id: int, amount: int) -> ProcessingResult:
        # Withdrawals share the id namespace with deposits but are never recorded.
        if transaction_id in account.deposits:
            return ProcessingResult.DUPLICATE_TRANSACTION

        if amount > account.available:
            return ProcessingResult.INSUFFICIENT_FUNDS

        account.debit(amount)
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, account: ClientAccount, transaction_id: int) -> ProcessingResult:
        deposit = account.deposits.get(transaction_id)

        if deposit is None:
            return ProcessingResult.TRANSACTION_NOT_FOUND

        if deposit.under_dispute:
            return ProcessingResult.ALREADY_DISPUTED

        if deposit.amount > account.available:
            return ProcessingResult.INSUFFICIENT_FUNDS

        account.hold(deposit.amount)
        deposit.under_dispute = True
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, account: ClientAccount, transaction_id: int) -> ProcessingResult:
        deposit = account.deposits.get(transaction_id)

        if deposit is None:
            return ProcessingResult.TRANSACTION_NOT_FOUND

        if not deposit.under_dispute:
            return ProcessingResult.NOT_DISPUTED

        account.release_hold(deposit.amount)
        deposit.under_dispute = False
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, account: ClientAccount, transaction_id: int) -> ProcessingResult:
        deposit = account.deposits.get(transaction_id)

        if deposit is None:
            return ProcessingResult.TRANSACTION_NOT_FOUND

        if not deposit.under_dispute:
            return ProcessingResult.NOT_DISPUTED

        # The record stays under dispute; a locked account accepts nothing further.
        account.remove_held(deposit.amount)
        account.locked = True
        return ProcessingResult.SUCCESS
