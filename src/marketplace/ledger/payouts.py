"""Admin scheduling and status updates for vendor transactions."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account
from marketplace.domain import marketplace
from marketplace.ledger.settlement import DEFAULT_CURRENCY
from marketplace.ledger.transaction import Transaction

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Transaction")
class CreateTransaction:
    vendor_id = Identifier(required=True)
    message = String(required=True, max_length=1000)
    scheduled_date = DateTime(required=True)
    amount = Float(min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    notes = Text()


@marketplace.command(part_of="Transaction")
class UpdateTransaction:
    transaction_id = Identifier(required=True)
    status = String(max_length=20)
    notes = Text()


def _assert_vendor_exists(vendor_id: str) -> None:
    try:
        account = current_domain.repository_for(Account).get(vendor_id)
    except ObjectNotFoundError:
        raise ValidationError({"vendor_id": ["Invalid vendor ID"]}) from None
    if not account.is_vendor:
        raise ValidationError({"vendor_id": ["Invalid vendor ID"]})


@marketplace.command_handler(part_of=Transaction)
class TransactionHandler:
    @handle(CreateTransaction)
    def create_transaction(self, command):
        _assert_vendor_exists(command.vendor_id)
        transaction = Transaction.create(
            vendor_id=command.vendor_id,
            message=command.message,
            scheduled_date=command.scheduled_date,
            amount=command.amount,
            currency=command.currency,
            notes=command.notes,
        )
        current_domain.repository_for(Transaction).add(transaction)

        logger.info("Transaction scheduled", transaction_id=str(transaction.id), vendor_id=command.vendor_id)
        return str(transaction.id)

    @handle(UpdateTransaction)
    def update_transaction(self, command):
        repo = current_domain.repository_for(Transaction)
        transaction = repo.get(command.transaction_id)
        transaction.apply_update(status=command.status, notes=command.notes)
        repo.add(transaction)

        logger.info("Transaction updated", transaction_id=str(transaction.id), status=transaction.status)
        return str(transaction.id)
