# gagyebu/models/category.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Integer, Boolean, DateTime, Uuid, CheckConstraint
from gagyebu.core.database import Base

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("budget_amount >= 0", name="ck_categories_budget_amount_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    # Either a known icon name ("utensils") or a literal emoji
    icon = Column(String(length=50), nullable=False, default="✨")
    color = Column(String(length=20), nullable=False, default="#6B7280")
    # Monthly budget in won; 0 means no budget is set
    budget_amount = Column(Integer, nullable=False, default=0)
    is_default = Column(Boolean(), nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
