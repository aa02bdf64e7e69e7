from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from splitbook.api.deps import get_group_or_404, get_ledger_service
from splitbook.models.group import Group
from splitbook.schemas.balance import BalanceResponse, SuggestedPaymentResponse, SuggestionStrategy
from splitbook.services.export_service import ExportDataType, report_filename
from splitbook.services.ledger_service import LedgerService

router = APIRouter()


@router.get("/{group_id}/balances", response_model=List[BalanceResponse])
async def get_balances(
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Net balance of every participant in the group"""
    return await service.get_balances(group.id)


@router.get("/{group_id}/balances/suggestions", response_model=List[SuggestedPaymentResponse])
async def get_settlement_suggestions(
    strategy: SuggestionStrategy = Query(SuggestionStrategy.GREEDY),
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Who should pay whom to settle up"""
    return await service.suggest_settlements(group.id, strategy)


@router.get("/{group_id}/export.csv")
async def export_csv(
    data_type: ExportDataType = Query(ExportDataType.ALL),
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Download expenses and/or balances as CSV"""
    content = await service.export_report(group, data_type)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(group)}"'}
    )
