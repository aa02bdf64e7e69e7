from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from splitbook.api.deps import get_group_or_404, get_ledger_service
from splitbook.models.group import Group
from splitbook.models.ledger import Settlement
from splitbook.schemas.settlement import SettlementCreate
from splitbook.services.ledger_service import LedgerService
from splitbook.utils.ledger_validation import LedgerValidationError

router = APIRouter()


@router.post("/{group_id}/settlements", response_model=Settlement, status_code=status.HTTP_201_CREATED)
async def create_settlement(
    settlement_in: SettlementCreate,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Record a payment from one participant to another"""
    try:
        return await service.record_settlement(group.id, settlement_in)
    except LedgerValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )


@router.get("/{group_id}/settlements", response_model=List[Settlement])
async def list_settlements(
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    return await service.settlements.list_settlements(group.id)
