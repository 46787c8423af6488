"""Settlement and transaction endpoints."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.auth import get_principal, require_roles
from marketplace.api.schemas import (
    CreateTransactionRequest,
    SettlementListResponse,
    SettlementResponse,
    SettlementSchema,
    TransactionListResponse,
    TransactionResponse,
    TransactionSchema,
    UpdateSettlementRequest,
    UpdateTransactionRequest,
)
from marketplace.ledger.payouts import CreateTransaction, UpdateTransaction
from marketplace.ledger.queries import list_settlements, list_transactions
from marketplace.ledger.settlement import Settlement
from marketplace.ledger.settlement_update import UpdateSettlement
from marketplace.ledger.transaction import Transaction
from marketplace.shared.principal import Principal, Role

settlement_router = APIRouter(prefix="/payments", tags=["settlements"])
transaction_router = APIRouter(prefix="/admin/transactions", tags=["transactions"])

_admin_only = require_roles(Role.ADMIN)


@settlement_router.get("", response_model=SettlementListResponse)
async def get_settlements(
    vendor_id: str | None = None,
    status: str | None = None,
    principal: Principal = Depends(get_principal),
) -> SettlementListResponse:
    settlements = list_settlements(principal, vendor_id=vendor_id, status=status)
    return SettlementListResponse(settlements=[SettlementSchema.model_validate(s) for s in settlements])


@settlement_router.patch("", response_model=SettlementResponse)
async def update_settlement(
    body: UpdateSettlementRequest, principal: Principal = Depends(_admin_only)
) -> SettlementResponse:
    command = UpdateSettlement(
        settlement_id=body.settlement_id,
        status=body.status,
        amount_paid=body.amount_paid,
        notes=body.notes,
    )
    settlement_id = current_domain.process(command, asynchronous=False)
    settlement = current_domain.repository_for(Settlement).get(settlement_id)
    return SettlementResponse(message="Settlement updated", settlement=SettlementSchema.model_validate(settlement))


@transaction_router.get("", response_model=TransactionListResponse)
async def get_transactions(
    vendor_id: str | None = None,
    status: str | None = None,
    principal: Principal = Depends(get_principal),
) -> TransactionListResponse:
    transactions = list_transactions(principal, vendor_id=vendor_id, status=status)
    return TransactionListResponse(transactions=[TransactionSchema.model_validate(t) for t in transactions])


@transaction_router.post("", status_code=201, response_model=TransactionResponse)
async def create_transaction(
    body: CreateTransactionRequest, principal: Principal = Depends(_admin_only)
) -> TransactionResponse:
    command = CreateTransaction(**body.model_dump())
    transaction_id = current_domain.process(command, asynchronous=False)
    transaction = current_domain.repository_for(Transaction).get(transaction_id)
    return TransactionResponse(message="Transaction created", transaction=TransactionSchema.model_validate(transaction))


@transaction_router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str, body: UpdateTransactionRequest, principal: Principal = Depends(_admin_only)
) -> TransactionResponse:
    command = UpdateTransaction(transaction_id=transaction_id, status=body.status, notes=body.notes)
    current_domain.process(command, asynchronous=False)
    transaction = current_domain.repository_for(Transaction).get(transaction_id)
    return TransactionResponse(message="Transaction updated", transaction=TransactionSchema.model_validate(transaction))
