"""Role-scoped reads over the payout ledgers.

Admins see every record and may narrow by vendor; vendors only ever see
their own records whatever they ask for; everyone else is refused.
"""

from protean.utils.globals import current_domain

from marketplace.errors import Forbidden
from marketplace.ledger.lifecycle import parse_status
from marketplace.ledger.settlement import Settlement, SettlementStatus
from marketplace.ledger.transaction import Transaction, TransactionStatus
from marketplace.shared.principal import Principal


def _scoped_criteria(principal: Principal, vendor_id: str | None, status_cls, status: str | None) -> dict:
    if principal.is_admin:
        criteria = {"vendor_id": vendor_id} if vendor_id else {}
    elif principal.is_vendor:
        criteria = {"vendor_id": principal.id}
    else:
        raise Forbidden("Forbidden")

    if status and status.strip():
        criteria["status"] = parse_status(status_cls, status).value
    return criteria


def list_settlements(principal: Principal, vendor_id: str | None = None, status: str | None = None) -> list[Settlement]:
    """Settlements visible to `principal`, earliest scheduled first."""
    criteria = _scoped_criteria(principal, vendor_id, SettlementStatus, status)
    query = current_domain.repository_for(Settlement)._dao.query
    query = query.filter(**criteria) if criteria else query
    return query.order_by("scheduled_date").limit(None).all().items


def list_transactions(
    principal: Principal, vendor_id: str | None = None, status: str | None = None
) -> list[Transaction]:
    """Transactions visible to `principal`, newest first."""
    criteria = _scoped_criteria(principal, vendor_id, TransactionStatus, status)
    query = current_domain.repository_for(Transaction)._dao.query
    query = query.filter(**criteria) if criteria else query
    return query.order_by("-created_at").limit(None).all().items
