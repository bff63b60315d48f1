"""
Cached reads, one per table.

Each function issues one filtered query through the crud layer, converts the
rows to read models and caches them under a key derived from the query
parameters. The key helpers are what the write paths use to invalidate.
"""
import logging
import uuid
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from gagyebu.core.cache import CacheEntry, QueryCache, query_cache
from gagyebu.crud.category import get_categories_for_user
from gagyebu.crud.fixed_expense import get_fixed_expenses_for_user
from gagyebu.crud.payment_method import get_payment_methods_for_user
from gagyebu.crud.transaction import get_transactions_for_month
from gagyebu.models.transaction import TransactionType
from gagyebu.schemas.category import CategoryRead
from gagyebu.schemas.fixed_expense import FixedExpenseRead
from gagyebu.schemas.payment_method import PaymentMethodRead
from gagyebu.schemas.transaction import TransactionRead

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# CACHE KEYS
# ────────────────────────────────────────────────────────────────────────────────
def user_prefix(user_id: uuid.UUID) -> str:
    return f"{user_id}:"

def categories_key(user_id: uuid.UUID) -> str:
    return f"{user_id}:categories"

def payment_methods_key(user_id: uuid.UUID) -> str:
    return f"{user_id}:payment_methods"

def transactions_key(user_id: uuid.UUID, year: int, month: int) -> str:
    return f"{user_id}:transactions-{year}-{month}"

def transactions_prefix(user_id: uuid.UUID) -> str:
    return f"{user_id}:transactions-"

def fixed_expenses_key(user_id: uuid.UUID) -> str:
    return f"{user_id}:fixed_expenses"


# ────────────────────────────────────────────────────────────────────────────────
# READS
# ────────────────────────────────────────────────────────────────────────────────
async def use_categories(db: AsyncSession, user_id: uuid.UUID, cache: QueryCache = query_cache) -> CacheEntry:
    async def fetch():
        rows = await get_categories_for_user(user_id, db)
        return [CategoryRead.model_validate(r) for r in rows]
    return await cache.fetch(categories_key(user_id), fetch)

async def use_payment_methods(db: AsyncSession, user_id: uuid.UUID, cache: QueryCache = query_cache) -> CacheEntry:
    async def fetch():
        rows = await get_payment_methods_for_user(user_id, db)
        return [PaymentMethodRead.model_validate(r) for r in rows]
    return await cache.fetch(payment_methods_key(user_id), fetch)

async def use_transactions(
    db: AsyncSession, user_id: uuid.UUID, year: int, month: int, cache: QueryCache = query_cache
) -> CacheEntry:
    async def fetch():
        rows = await get_transactions_for_month(user_id, year, month, db)
        return [TransactionRead.model_validate(r) for r in rows]
    return await cache.fetch(transactions_key(user_id, year, month), fetch)

async def use_fixed_expenses(db: AsyncSession, user_id: uuid.UUID, cache: QueryCache = query_cache) -> CacheEntry:
    async def fetch():
        rows = await get_fixed_expenses_for_user(user_id, db)
        return [FixedExpenseRead.model_validate(r) for r in rows]
    return await cache.fetch(fixed_expenses_key(user_id), fetch)

async def use_monthly_stats(
    db: AsyncSession, user_id: uuid.UUID, year: int, month: int, cache: QueryCache = query_cache
) -> Dict[str, int]:
    entry = await use_transactions(db, user_id, year, month, cache)
    transactions = entry.data or []
    income = sum(t.amount for t in transactions if t.type == TransactionType.income)
    expense = sum(t.amount for t in transactions if t.type == TransactionType.expense)
    return {"income": income, "expense": expense, "balance": income - expense}

def unwrap(entry: CacheEntry) -> list:
    """Rows of a cached read; a failed fetch re-raises its error."""
    if entry.error is not None:
        raise entry.error
    return entry.data if entry.data is not None else []
