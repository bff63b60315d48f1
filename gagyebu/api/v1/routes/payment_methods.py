# gagyebu/api/v1/routes/payment_methods.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from gagyebu.schemas.payment_method import PaymentMethodCreate, PaymentMethodRead, PaymentMethodUpdate
from gagyebu.crud.payment_method import get_payment_method_by_id
from gagyebu.core.database import get_async_session
from gagyebu.core.auth import User
from gagyebu.api.deps import get_current_user
from gagyebu.services import forms
from gagyebu.services.queries import use_payment_methods, unwrap

router = APIRouter(prefix="/payment-methods", tags=["payment methods"])

@router.get("", response_model=List[PaymentMethodRead])
async def read_payment_methods(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return unwrap(await use_payment_methods(db, user.id))

@router.post("", response_model=PaymentMethodRead, status_code=status.HTTP_201_CREATED)
async def create_payment_method(
    pm_in: PaymentMethodCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await forms.add_payment_method(user.id, pm_in, db)

@router.get("/{pm_id}", response_model=PaymentMethodRead)
async def read_payment_method(
    pm_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pm = await get_payment_method_by_id(pm_id, user.id, db)
    if not pm:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Payment method not found")
    return pm

@router.patch("/{pm_id}", response_model=PaymentMethodRead)
async def update_payment_method_endpoint(
    pm_id: uuid.UUID,
    pm_in: PaymentMethodUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pm = await get_payment_method_by_id(pm_id, user.id, db)
    if not pm:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Payment method not found")
    return await forms.edit_payment_method(user.id, pm, pm_in, db)

@router.delete("/{pm_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment_method_endpoint(
    pm_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pm = await get_payment_method_by_id(pm_id, user.id, db)
    if not pm:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Payment method not found")
    await forms.remove_payment_method(user.id, pm, db)
    return None
