# gagyebu/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from gagyebu.schemas.transaction import (
    TransactionCreate,
    TransactionCreateResult,
    TransactionFormOptions,
    TransactionRead,
    TransactionUpdate,
)
from gagyebu.crud.transaction import get_transaction_by_id
from gagyebu.core.database import get_async_session
from gagyebu.core.auth import User
from gagyebu.api.deps import get_current_user
from gagyebu.models.transaction import TransactionType
from gagyebu.services import forms
from gagyebu.services.queries import use_categories, use_payment_methods, use_transactions, unwrap
from gagyebu.utils.formatting import INSTALLMENT_OPTIONS
from gagyebu.utils.icons import categories_for_type

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return unwrap(await use_transactions(db, user.id, year, month))

@router.get("/form-options", response_model=TransactionFormOptions)
async def read_form_options(
    type: TransactionType = TransactionType.expense,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Dropdown contents for the add-transaction sheet."""
    categories = unwrap(await use_categories(db, user.id))
    payment_methods = unwrap(await use_payment_methods(db, user.id))
    return TransactionFormOptions(
        categories=categories_for_type(categories, type.value),
        payment_methods=payment_methods,
        installment_options=INSTALLMENT_OPTIONS,
    )

@router.post("", response_model=TransactionCreateResult, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx, fixed_expense, fixed_error = await forms.submit_transaction(user.id, tx_in, db)
    return TransactionCreateResult(
        transaction=TransactionRead.model_validate(tx),
        fixed_expense_id=fixed_expense.id if fixed_expense else None,
        fixed_expense_error=fixed_error.detail if fixed_error else None,
    )

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.patch("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return await forms.edit_transaction(user.id, tx, tx_in, db)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await forms.remove_transaction(user.id, tx, db)
    return None
