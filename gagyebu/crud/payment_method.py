# gagyebu/crud/payment_method.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from gagyebu.core.db_utils import with_store_errors
from gagyebu.models.payment_method import PaymentMethod, PaymentMethodType
from gagyebu.utils.icons import PAYMENT_TYPE_COLORS, PAYMENT_TYPE_ICONS
from typing import Any, Dict, List, Optional
import uuid
from gagyebu.schemas.payment_method import PaymentMethodCreate, PaymentMethodUpdate

BILLING_FIELDS = ("billing_day", "billing_start_day", "billing_end_day")

def build_payment_method_payload(
    name: str,
    pm_type: PaymentMethodType,
    billing: Dict[str, Optional[int]],
) -> Dict[str, Any]:
    """Colour and icon follow the type; billing fields only survive on cards."""
    pm_type = PaymentMethodType(pm_type)
    payload: Dict[str, Any] = {
        "name": name,
        "type": pm_type,
        "color": PAYMENT_TYPE_COLORS[pm_type.value],
        "icon": PAYMENT_TYPE_ICONS[pm_type.value],
    }
    for field in BILLING_FIELDS:
        payload[field] = billing.get(field) if pm_type == PaymentMethodType.card else None
    return payload

async def get_payment_methods_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[PaymentMethod]:
    result = await db.execute(
        select(PaymentMethod)
        .where(PaymentMethod.user_id == user_id)
        .order_by(PaymentMethod.created_at.asc())
    )
    return result.scalars().all()

async def get_payment_method_by_id(pm_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[PaymentMethod]:
    result = await db.execute(
        select(PaymentMethod).where(PaymentMethod.id == pm_id, PaymentMethod.user_id == user_id)
    )
    return result.scalar_one_or_none()

@with_store_errors
async def create_payment_method_for_user(user_id: uuid.UUID, pm_in: PaymentMethodCreate, db: AsyncSession) -> PaymentMethod:
    payload = build_payment_method_payload(pm_in.name, pm_in.type, pm_in.model_dump(include=set(BILLING_FIELDS)))
    new_pm = PaymentMethod(**payload, user_id=user_id, is_default=False)
    db.add(new_pm)
    await db.commit()
    await db.refresh(new_pm)
    return new_pm

@with_store_errors
async def update_payment_method(pm: PaymentMethod, pm_in: PaymentMethodUpdate, db: AsyncSession) -> PaymentMethod:
    # The edit form always submits the whole record; merge so partial updates behave the same
    billing = {field: getattr(pm, field) for field in BILLING_FIELDS}
    billing.update(pm_in.model_dump(include=set(BILLING_FIELDS), exclude_unset=True))
    payload = build_payment_method_payload(
        pm_in.name or pm.name,
        pm_in.type or pm.type,
        billing,
    )
    for field, value in payload.items():
        setattr(pm, field, value)
    db.add(pm)
    await db.commit()
    await db.refresh(pm)
    return pm

@with_store_errors
async def delete_payment_method(pm: PaymentMethod, db: AsyncSession) -> None:
    await db.delete(pm)
    await db.commit()


DEFAULT_PAYMENT_METHODS: List[dict] = [
    {"name": "현금", "type": PaymentMethodType.cash},
]

async def seed_default_payment_methods_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[PaymentMethod]:
    result = await db.execute(select(PaymentMethod.name).where(PaymentMethod.user_id == user_id))
    existing_names = {row[0] for row in result.all()}

    to_create = [
        PaymentMethod(**build_payment_method_payload(pm["name"], pm["type"], {}), user_id=user_id, is_default=True)
        for pm in DEFAULT_PAYMENT_METHODS
        if pm["name"] not in existing_names
    ]
    if to_create:
        db.add_all(to_create)
        await db.commit()
    return to_create
