# gagyebu/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from gagyebu.core.db_utils import with_store_errors
from gagyebu.models.transaction import Transaction
from gagyebu.utils.formatting import month_range
from typing import Any, Dict, List, Optional
import uuid

async def get_transactions_for_month(user_id: uuid.UUID, year: int, month: int, db: AsyncSession) -> List[Transaction]:
    start, end = month_range(year, month)
    result = await db.execute(
        select(Transaction)
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= start,
            Transaction.date <= end,
        )
        .order_by(Transaction.date.asc(), Transaction.created_at.desc())
    )
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

@with_store_errors
async def insert_transaction(user_id: uuid.UUID, payload: Dict[str, Any], db: AsyncSession) -> Transaction:
    new_tx = Transaction(**payload, user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

@with_store_errors
async def update_transaction(tx: Transaction, changes: Dict[str, Any], db: AsyncSession) -> Transaction:
    for field, value in changes.items():
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

@with_store_errors
async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()
