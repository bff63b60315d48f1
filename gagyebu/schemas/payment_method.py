# gagyebu/schemas/payment_method.py
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from gagyebu.models.payment_method import PaymentMethodType

# The end-of-month option in the billing period dropdown
END_OF_MONTH = "말일"

def _end_day(v: Union[int, str, None]) -> Optional[int]:
    if v is None or v == "":
        return None
    if v == END_OF_MONTH:
        return 0
    v = int(v)
    if not 0 <= v <= 31:
        raise ValueError("정산 종료일은 1~31일 또는 말일이어야 합니다.")
    return v

class PaymentMethodCreate(BaseModel):
    name: str = Field(..., max_length=100, description="E.g. 삼성카드")
    type: PaymentMethodType = PaymentMethodType.card
    billing_day: Optional[int] = Field(None, ge=1, le=28)
    billing_start_day: Optional[int] = Field(None, ge=1, le=31)
    billing_end_day: Optional[Union[int, str]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("결제 수단 이름을 입력해주세요.")
        return v

    @field_validator("billing_end_day")
    @classmethod
    def end_day(cls, v):
        return _end_day(v)

class PaymentMethodUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    type: Optional[PaymentMethodType] = None
    billing_day: Optional[int] = Field(None, ge=1, le=28)
    billing_start_day: Optional[int] = Field(None, ge=1, le=31)
    billing_end_day: Optional[Union[int, str]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("결제 수단 이름을 입력해주세요.")
        return v

    @field_validator("billing_end_day")
    @classmethod
    def end_day(cls, v):
        return _end_day(v)

class PaymentMethodRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    type: PaymentMethodType
    color: str
    icon: str
    is_default: bool
    billing_day: Optional[int] = None
    billing_start_day: Optional[int] = None
    billing_end_day: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
