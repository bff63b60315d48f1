# gagyebu/api/v1/routes/fixed_expenses.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from gagyebu.schemas.fixed_expense import FixedExpenseRead, FixedExpenseUpdate
from gagyebu.crud.fixed_expense import get_fixed_expense_by_id
from gagyebu.core.database import get_async_session
from gagyebu.core.auth import User
from gagyebu.api.deps import get_current_user
from gagyebu.services import forms
from gagyebu.services.queries import use_fixed_expenses, unwrap

# Fixed expenses are created only through a recurring transaction
router = APIRouter(prefix="/fixed-expenses", tags=["fixed expenses"])

@router.get("", response_model=List[FixedExpenseRead])
async def read_fixed_expenses(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return unwrap(await use_fixed_expenses(db, user.id))

@router.patch("/{fe_id}", response_model=FixedExpenseRead)
async def update_fixed_expense_endpoint(
    fe_id: uuid.UUID,
    fe_in: FixedExpenseUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    fe = await get_fixed_expense_by_id(fe_id, user.id, db)
    if not fe:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Fixed expense not found")
    return await forms.edit_fixed_expense(user.id, fe, fe_in, db)

@router.delete("/{fe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fixed_expense_endpoint(
    fe_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    fe = await get_fixed_expense_by_id(fe_id, user.id, db)
    if not fe:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Fixed expense not found")
    await forms.remove_fixed_expense(user.id, fe, db)
    return None
