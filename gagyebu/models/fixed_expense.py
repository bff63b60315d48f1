# gagyebu/models/fixed_expense.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Integer, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from gagyebu.core.database import Base
from gagyebu.models.category import Category
from gagyebu.models.payment_method import PaymentMethod

class FixedExpense(Base):
    __tablename__ = "fixed_expenses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    payment_method_id = Column(Uuid(as_uuid=True), ForeignKey("payment_methods.id", ondelete="SET NULL"), nullable=True)
    description = Column(String(length=255), nullable=False)
    amount = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=True)
    # For pausing a recurring bill without deleting it
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    category = relationship(Category, lazy="joined")
    payment_method = relationship(PaymentMethod, lazy="joined")

    def __repr__(self):
        return f"<FixedExpense description={self.description} amount={self.amount} user_id={self.user_id}>"
