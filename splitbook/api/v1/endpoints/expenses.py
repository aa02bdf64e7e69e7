from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from splitbook.api.deps import get_group_or_404, get_ledger_service
from splitbook.models.group import Group
from splitbook.models.ledger import Expense
from splitbook.schemas.expense import ExpenseCreate, ExpenseUpdate
from splitbook.services.ledger_service import LedgerService
from splitbook.utils.ledger_validation import LedgerValidationError

router = APIRouter()


@router.post("/{group_id}/expenses", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Log an expense and split it among participants"""
    try:
        return await service.add_expense(group, expense_in)
    except LedgerValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )


@router.get("/{group_id}/expenses", response_model=List[Expense])
async def list_expenses(
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    return await service.expenses.list_expenses(group.id)


@router.get("/{group_id}/expenses/{expense_id}", response_model=Expense)
async def get_expense(
    expense_id: str,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    expense = await service.expenses.get_expense(group.id, expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense


@router.put("/{group_id}/expenses/{expense_id}", response_model=Expense)
async def update_expense(
    expense_id: str,
    expense_in: ExpenseUpdate,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    """Replace an expense and its splits"""
    try:
        expense = await service.update_expense(group, expense_id, expense_in)
    except LedgerValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense


@router.delete("/{group_id}/expenses/{expense_id}")
async def delete_expense(
    expense_id: str,
    group: Group = Depends(get_group_or_404),
    service: LedgerService = Depends(get_ledger_service)
):
    deleted = await service.delete_expense(group.id, expense_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")

    return {"success": True}
