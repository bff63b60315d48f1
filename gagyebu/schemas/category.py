# gagyebu/schemas/category.py
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from gagyebu.utils.icons import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON

class CategoryBase(BaseModel):
    name: str = Field(..., max_length=100, description="E.g. 식비")
    icon: str = DEFAULT_CATEGORY_ICON
    color: str = DEFAULT_CATEGORY_COLOR

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("카테고리 이름을 입력해주세요.")
        return v

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("카테고리 이름을 입력해주세요.")
        return v

class CategoryRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    icon: str
    color: str
    budget_amount: int
    is_default: bool
    created_at: datetime

    class Config:
        from_attributes = True

class BudgetDraft(BaseModel):
    """Budget edit form: category id -> new monthly budget (None or missing = 0)."""
    budgets: Dict[uuid.UUID, Optional[int]]

    @field_validator("budgets")
    @classmethod
    def non_negative(cls, v: Dict[uuid.UUID, Optional[int]]) -> Dict[uuid.UUID, Optional[int]]:
        for amount in v.values():
            if amount is not None and amount < 0:
                raise ValueError("예산은 0 이상이어야 합니다.")
        return v
