# gagyebu/schemas/fixed_expense.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from gagyebu.schemas.category import CategoryRead
from gagyebu.schemas.payment_method import PaymentMethodRead

class FixedExpenseCreate(BaseModel):
    category_id: Optional[uuid.UUID] = None
    payment_method_id: Optional[uuid.UUID] = None
    description: str = Field(..., max_length=255)
    amount: int = Field(..., gt=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    is_active: bool = True

class FixedExpenseUpdate(BaseModel):
    description: Optional[str] = Field(None, max_length=255)
    amount: Optional[int] = Field(None, gt=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    is_active: Optional[bool] = None

class FixedExpenseRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    category_id: Optional[uuid.UUID] = None
    payment_method_id: Optional[uuid.UUID] = None
    description: str
    amount: int
    due_day: Optional[int] = None
    is_active: bool
    created_at: datetime
    # joined
    category: Optional[CategoryRead] = None
    payment_method: Optional[PaymentMethodRead] = None

    class Config:
        from_attributes = True
