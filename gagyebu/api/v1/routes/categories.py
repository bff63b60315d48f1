# gagyebu/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from gagyebu.schemas.category import BudgetDraft, CategoryCreate, CategoryRead, CategoryUpdate
from gagyebu.crud.category import get_category_by_id
from gagyebu.core.database import get_async_session
from gagyebu.core.auth import User
from gagyebu.api.deps import get_current_user
from gagyebu.services import forms
from gagyebu.services.queries import use_categories, unwrap

router = APIRouter(prefix="/categories", tags=["categories"])

async def _get_owned_category(category_id: uuid.UUID, user: User, db: AsyncSession):
    category = await get_category_by_id(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category

@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return unwrap(await use_categories(db, user.id))

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await forms.add_category(user.id, cat_in, db)

# Declared before the /{category_id} routes so "budgets" is not parsed as an id
@router.put("/budgets", response_model=List[CategoryRead])
async def save_budgets(
    draft: BudgetDraft,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Save the budget edit form; returns only the categories that changed."""
    return await forms.save_budget_draft(user.id, draft.budgets, db)

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _get_owned_category(category_id, user, db)

@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await _get_owned_category(category_id, user, db)
    return await forms.edit_category(user.id, category, cat_in, db)

@router.delete("/{category_id}/budget", response_model=CategoryRead)
async def reset_category_budget(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await _get_owned_category(category_id, user, db)
    return await forms.reset_budget(user.id, category, db)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await _get_owned_category(category_id, user, db)
    await forms.remove_category(user.id, category, db)
    return None
