# gagyebu/schemas/transaction.py
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
import datetime as dt
import uuid

from gagyebu.models.transaction import TransactionType
from gagyebu.schemas.category import CategoryRead
from gagyebu.schemas.payment_method import PaymentMethodRead
from gagyebu.utils.formatting import INSTALLMENT_MONTHS

def _installment(v: Optional[int]) -> Optional[int]:
    if v is not None and v not in INSTALLMENT_MONTHS:
        raise ValueError(f"할부 개월 수는 {sorted(INSTALLMENT_MONTHS)} 중 하나여야 합니다.")
    return v

class TransactionCreate(BaseModel):
    type: TransactionType = TransactionType.expense
    amount: int = Field(..., gt=0, description="Amount in won")
    category_id: Optional[uuid.UUID] = None
    payment_method_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(None, max_length=255, description="E.g. 점심 김밥")
    memo: Optional[str] = Field(None, max_length=255)
    date: dt.date
    is_fixed: bool = Field(False, description="Also register as a monthly fixed expense")
    installment_months: Optional[int] = 1

    @field_validator("installment_months")
    @classmethod
    def installment_option(cls, v: Optional[int]) -> Optional[int]:
        return _installment(v)

class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[int] = Field(None, gt=0)
    category_id: Optional[uuid.UUID] = None
    payment_method_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(None, max_length=255)
    memo: Optional[str] = Field(None, max_length=255)
    date: Optional[dt.date] = None
    installment_months: Optional[int] = None

    @field_validator("installment_months")
    @classmethod
    def installment_option(cls, v: Optional[int]) -> Optional[int]:
        return _installment(v)

class TransactionRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: TransactionType
    amount: int
    category_id: Optional[uuid.UUID] = None
    payment_method_id: Optional[uuid.UUID] = None
    description: Optional[str] = None
    memo: Optional[str] = None
    date: dt.date
    is_fixed: bool
    installment_months: Optional[int] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    # joined
    category: Optional[CategoryRead] = None
    payment_method: Optional[PaymentMethodRead] = None

    class Config:
        from_attributes = True

class TransactionCreateResult(BaseModel):
    transaction: TransactionRead
    fixed_expense_id: Optional[uuid.UUID] = None
    fixed_expense_error: Optional[str] = None

class TransactionFormOptions(BaseModel):
    categories: List[CategoryRead]
    payment_methods: List[PaymentMethodRead]
    installment_options: List[dict]
