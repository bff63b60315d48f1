"""
Write paths behind the transaction, category, payment method and fixed
expense forms.

Each function performs its store writes in order and then invalidates every
cache key whose result the writes could have changed. Writes are not wrapped
in a shared transaction: when a recurring transaction's fixed-expense insert
fails, the transaction insert stays.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gagyebu.core.cache import QueryCache, query_cache
from gagyebu.core.db_utils import StoreWriteError
from gagyebu.crud import category as category_crud
from gagyebu.crud import fixed_expense as fixed_expense_crud
from gagyebu.crud import payment_method as payment_method_crud
from gagyebu.crud import transaction as transaction_crud
from gagyebu.models.category import Category
from gagyebu.models.fixed_expense import FixedExpense
from gagyebu.models.payment_method import PaymentMethod, PaymentMethodType
from gagyebu.models.transaction import Transaction, TransactionType
from gagyebu.schemas.category import CategoryCreate, CategoryUpdate
from gagyebu.schemas.fixed_expense import FixedExpenseCreate, FixedExpenseUpdate
from gagyebu.schemas.payment_method import PaymentMethodCreate, PaymentMethodUpdate
from gagyebu.schemas.transaction import TransactionCreate, TransactionUpdate
from gagyebu.services.queries import (
    categories_key,
    fixed_expenses_key,
    payment_methods_key,
    transactions_key,
    transactions_prefix,
)

logger = logging.getLogger(__name__)

DEFAULT_FIXED_DESCRIPTION = "반복 지출"


# ────────────────────────────────────────────────────────────────────────────────
# TRANSACTIONS
# ────────────────────────────────────────────────────────────────────────────────
async def resolve_references(
    user_id: uuid.UUID,
    category_id: Optional[uuid.UUID],
    payment_method_id: Optional[uuid.UUID],
    db: AsyncSession,
) -> Optional[PaymentMethod]:
    """Check both references belong to the user; returns the payment method, if any."""
    if category_id is not None:
        if await category_crud.get_category_by_id(category_id, user_id, db) is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    if payment_method_id is None:
        return None
    payment_method = await payment_method_crud.get_payment_method_by_id(payment_method_id, user_id, db)
    if payment_method is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Payment method not found")
    return payment_method


def allowed_installment(
    tx_type: TransactionType, payment_method: Optional[PaymentMethod], months: Optional[int]
) -> Optional[int]:
    """Installments only apply to card expenses longer than one month."""
    is_card = payment_method is not None and PaymentMethodType(payment_method.type) == PaymentMethodType.card
    if TransactionType(tx_type) == TransactionType.expense and is_card and (months or 1) > 1:
        return months
    return None


def build_transaction_payload(tx_in: TransactionCreate, payment_method: Optional[PaymentMethod]) -> Dict[str, Any]:
    return {
        "type": tx_in.type,
        "amount": tx_in.amount,
        "category_id": tx_in.category_id,
        "payment_method_id": tx_in.payment_method_id,
        "description": tx_in.description or None,
        "memo": tx_in.memo or None,
        "date": tx_in.date,
        # Income is never recurring
        "is_fixed": tx_in.is_fixed and tx_in.type == TransactionType.expense,
        "installment_months": allowed_installment(tx_in.type, payment_method, tx_in.installment_months),
    }


def build_fixed_expense(tx: Transaction, description: Optional[str]) -> FixedExpenseCreate:
    return FixedExpenseCreate(
        category_id=tx.category_id,
        payment_method_id=tx.payment_method_id,
        description=(description or "").strip() or DEFAULT_FIXED_DESCRIPTION,
        amount=tx.amount,
        due_day=tx.date.day,
        is_active=True,
    )


async def submit_transaction(
    user_id: uuid.UUID,
    tx_in: TransactionCreate,
    db: AsyncSession,
    cache: QueryCache = query_cache,
) -> Tuple[Transaction, Optional[FixedExpense], Optional[StoreWriteError]]:
    """
    Insert a transaction and, when it is recurring, its fixed expense.

    A failed transaction insert raises StoreWriteError. A failed fixed-expense
    insert is returned as the third element; the transaction is kept.
    """
    payment_method = await resolve_references(user_id, tx_in.category_id, tx_in.payment_method_id, db)

    payload = build_transaction_payload(tx_in, payment_method)
    tx = await transaction_crud.insert_transaction(user_id, payload, db)
    logger.info(f"Inserted {tx.type} transaction {tx.id} for user {user_id}")

    fixed_expense = None
    fixed_error = None
    if tx.is_fixed:
        try:
            fixed_expense = await fixed_expense_crud.create_fixed_expense_for_user(
                user_id, build_fixed_expense(tx, tx_in.description), db
            )
            logger.info(f"Registered fixed expense {fixed_expense.id} (due day {fixed_expense.due_day})")
        except StoreWriteError as e:
            fixed_error = e
            logger.warning(f"Transaction {tx.id} saved but its fixed expense failed: {e.message}")
        cache.invalidate(fixed_expenses_key(user_id))

    cache.invalidate(transactions_key(user_id, tx.date.year, tx.date.month))
    return tx, fixed_expense, fixed_error


async def edit_transaction(
    user_id: uuid.UUID,
    tx: Transaction,
    tx_in: TransactionUpdate,
    db: AsyncSession,
    cache: QueryCache = query_cache,
) -> Transaction:
    old_year, old_month = tx.date.year, tx.date.month
    changes = tx_in.model_dump(exclude_unset=True)
    nullable = ("category_id", "payment_method_id", "description", "memo")
    changes = {k: v for k, v in changes.items() if v is not None or k in nullable}

    payment_method = await resolve_references(
        user_id, changes.get("category_id"), changes.get("payment_method_id"), db
    )
    new_type = changes.get("type", tx.type)
    if TransactionType(new_type) == TransactionType.income:
        changes["is_fixed"] = False

    # Re-apply the installment rule whenever any of its inputs changes
    if {"type", "payment_method_id", "installment_months"} & changes.keys():
        if "payment_method_id" not in changes and tx.payment_method_id is not None:
            payment_method = await payment_method_crud.get_payment_method_by_id(tx.payment_method_id, user_id, db)
        months = changes.get("installment_months", tx.installment_months)
        changes["installment_months"] = allowed_installment(new_type, payment_method, months)

    tx = await transaction_crud.update_transaction(tx, changes, db)
    cache.invalidate(transactions_key(user_id, old_year, old_month))
    cache.invalidate(transactions_key(user_id, tx.date.year, tx.date.month))
    return tx


async def remove_transaction(
    user_id: uuid.UUID, tx: Transaction, db: AsyncSession, cache: QueryCache = query_cache
) -> None:
    year, month = tx.date.year, tx.date.month
    await transaction_crud.delete_transaction(tx, db)
    cache.invalidate(transactions_key(user_id, year, month))


# ────────────────────────────────────────────────────────────────────────────────
# CATEGORIES
# ────────────────────────────────────────────────────────────────────────────────
async def add_category(
    user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession, cache: QueryCache = query_cache
) -> Category:
    category = await category_crud.create_category_for_user(user_id, cat_in, db)
    cache.invalidate(categories_key(user_id))
    return category


async def edit_category(
    user_id: uuid.UUID, category: Category, cat_in: CategoryUpdate, db: AsyncSession, cache: QueryCache = query_cache
) -> Category:
    category = await category_crud.update_category(category, cat_in, db)
    # Transactions and fixed expenses embed the joined category
    cache.invalidate(categories_key(user_id))
    cache.invalidate(fixed_expenses_key(user_id))
    cache.invalidate_prefix(transactions_prefix(user_id))
    return category


async def remove_category(
    user_id: uuid.UUID, category: Category, db: AsyncSession, cache: QueryCache = query_cache
) -> None:
    await category_crud.delete_category(category, db)
    cache.invalidate(categories_key(user_id))
    cache.invalidate(fixed_expenses_key(user_id))
    cache.invalidate_prefix(transactions_prefix(user_id))


async def save_budget_draft(
    user_id: uuid.UUID,
    draft: Dict[uuid.UUID, Optional[int]],
    db: AsyncSession,
    cache: QueryCache = query_cache,
) -> List[Category]:
    categories = await category_crud.get_categories_for_user(user_id, db)
    changed = await category_crud.save_budgets(categories, draft, db)
    logger.info(f"Saved {len(changed)} budget change(s) for user {user_id}")
    cache.invalidate(categories_key(user_id))
    return changed


async def reset_budget(
    user_id: uuid.UUID, category: Category, db: AsyncSession, cache: QueryCache = query_cache
) -> Category:
    category = await category_crud.set_category_budget(category, 0, db)
    cache.invalidate(categories_key(user_id))
    return category


# ────────────────────────────────────────────────────────────────────────────────
# PAYMENT METHODS
# ────────────────────────────────────────────────────────────────────────────────
async def add_payment_method(
    user_id: uuid.UUID, pm_in: PaymentMethodCreate, db: AsyncSession, cache: QueryCache = query_cache
) -> PaymentMethod:
    pm = await payment_method_crud.create_payment_method_for_user(user_id, pm_in, db)
    cache.invalidate(payment_methods_key(user_id))
    return pm


async def edit_payment_method(
    user_id: uuid.UUID, pm: PaymentMethod, pm_in: PaymentMethodUpdate, db: AsyncSession, cache: QueryCache = query_cache
) -> PaymentMethod:
    pm = await payment_method_crud.update_payment_method(pm, pm_in, db)
    cache.invalidate(payment_methods_key(user_id))
    cache.invalidate(fixed_expenses_key(user_id))
    cache.invalidate_prefix(transactions_prefix(user_id))
    return pm


async def remove_payment_method(
    user_id: uuid.UUID, pm: PaymentMethod, db: AsyncSession, cache: QueryCache = query_cache
) -> None:
    await payment_method_crud.delete_payment_method(pm, db)
    cache.invalidate(payment_methods_key(user_id))
    cache.invalidate(fixed_expenses_key(user_id))
    cache.invalidate_prefix(transactions_prefix(user_id))


# ────────────────────────────────────────────────────────────────────────────────
# FIXED EXPENSES
# ────────────────────────────────────────────────────────────────────────────────
async def edit_fixed_expense(
    user_id: uuid.UUID, fe: FixedExpense, fe_in: FixedExpenseUpdate, db: AsyncSession, cache: QueryCache = query_cache
) -> FixedExpense:
    fe = await fixed_expense_crud.update_fixed_expense(fe, fe_in, db)
    cache.invalidate(fixed_expenses_key(user_id))
    return fe


async def remove_fixed_expense(
    user_id: uuid.UUID, fe: FixedExpense, db: AsyncSession, cache: QueryCache = query_cache
) -> None:
    await fixed_expense_crud.delete_fixed_expense(fe, db)
    cache.invalidate(fixed_expenses_key(user_id))
