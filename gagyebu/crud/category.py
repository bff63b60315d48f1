# gagyebu/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from gagyebu.core.db_utils import with_store_errors
from gagyebu.models.category import Category
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import uuid
from gagyebu.schemas.category import CategoryCreate, CategoryUpdate

async def get_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category)
        .where(Category.user_id == user_id)
        .order_by(Category.created_at.asc())
    )
    return result.scalars().all()

async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

@with_store_errors
async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    new_cat = Category(**cat_in.model_dump(), user_id=user_id, budget_amount=0, is_default=False)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

@with_store_errors
async def update_category(category: Category, cat_in: CategoryUpdate, db: AsyncSession) -> Category:
    for field, value in cat_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, field, value)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

@with_store_errors
async def set_category_budget(category: Category, amount: int, db: AsyncSession) -> Category:
    category.budget_amount = amount
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

@with_store_errors
async def save_budgets(categories: List[Category], draft: Dict[uuid.UUID, Optional[int]], db: AsyncSession) -> List[Category]:
    """Write the budgets that changed; a category missing from the draft goes back to 0."""
    changed: List[Category] = []
    for cat in categories:
        new_budget = draft.get(cat.id) or 0
        if new_budget != cat.budget_amount:
            cat.budget_amount = new_budget
            db.add(cat)
            changed.append(cat)
    if changed:
        await db.commit()
    return changed

@with_store_errors
async def delete_category(category: Category, db: AsyncSession) -> None:
    # Transactions keep their category_id; the views show them as 미분류
    await db.delete(category)
    await db.commit()


# Default categories to be created for every new user
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "식비", "icon": "utensils", "color": "#EF4444"},
    {"name": "카페", "icon": "coffee", "color": "#F59E0B"},
    {"name": "교통", "icon": "car", "color": "#3B82F6"},
    {"name": "쇼핑", "icon": "shopping-bag", "color": "#EC4899"},
    {"name": "주거", "icon": "home", "color": "#8B5CF6"},
    {"name": "문화", "icon": "music", "color": "#6366F1"},
    {"name": "의료", "icon": "heart-pulse", "color": "#14B8A6"},
    {"name": "교육", "icon": "book-open", "color": "#06B6D4"},
    {"name": "기타지출", "icon": "minus-circle", "color": "#78716C"},
    {"name": "급여", "icon": "banknote", "color": "#22C55E"},
    {"name": "기타수입", "icon": "plus-circle", "color": "#10B981"},
]

async def seed_default_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    """Ensure the user has the default categories; create missing ones.

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(select(Category.name).where(Category.user_id == user_id))
    existing_names = {row[0] for row in result.all()}

    # Stagger created_at so the list keeps the order above
    base = datetime.utcnow()
    categories_to_create: List[Category] = []
    for i, cat in enumerate(DEFAULT_CATEGORIES):
        if cat["name"] not in existing_names:
            categories_to_create.append(
                Category(
                    user_id=user_id,
                    name=cat["name"],
                    icon=cat["icon"],
                    color=cat["color"],
                    budget_amount=0,
                    is_default=True,
                    created_at=base + timedelta(milliseconds=i),
                )
            )

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()

    return categories_to_create
