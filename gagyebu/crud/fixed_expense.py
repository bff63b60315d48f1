# gagyebu/crud/fixed_expense.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from gagyebu.core.db_utils import with_store_errors
from gagyebu.models.fixed_expense import FixedExpense
from typing import List, Optional
import uuid
from gagyebu.schemas.fixed_expense import FixedExpenseCreate, FixedExpenseUpdate

async def get_fixed_expenses_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[FixedExpense]:
    result = await db.execute(
        select(FixedExpense)
        .where(FixedExpense.user_id == user_id)
        .order_by(FixedExpense.due_day.asc())
    )
    return result.scalars().all()

async def get_fixed_expense_by_id(fe_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[FixedExpense]:
    result = await db.execute(
        select(FixedExpense).where(FixedExpense.id == fe_id, FixedExpense.user_id == user_id)
    )
    return result.scalar_one_or_none()

@with_store_errors
async def create_fixed_expense_for_user(user_id: uuid.UUID, fe_in: FixedExpenseCreate, db: AsyncSession) -> FixedExpense:
    new_fe = FixedExpense(**fe_in.model_dump(), user_id=user_id)
    db.add(new_fe)
    await db.commit()
    await db.refresh(new_fe)
    return new_fe

@with_store_errors
async def update_fixed_expense(fe: FixedExpense, fe_in: FixedExpenseUpdate, db: AsyncSession) -> FixedExpense:
    for field, value in fe_in.model_dump(exclude_unset=True).items():
        # due_day may be cleared; other fields keep their value when sent as null
        if value is not None or field == "due_day":
            setattr(fe, field, value)
    db.add(fe)
    await db.commit()
    await db.refresh(fe)
    return fe

@with_store_errors
async def delete_fixed_expense(fe: FixedExpense, db: AsyncSession) -> None:
    await db.delete(fe)
    await db.commit()
