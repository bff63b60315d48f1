# gagyebu/models/transaction.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Integer, Boolean, Date, DateTime, Enum, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from gagyebu.core.database import Base
from gagyebu.models.category import Category
from gagyebu.models.payment_method import PaymentMethod

class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    amount = Column(Integer, nullable=False)
    # Deleting a category or payment method leaves these pointing nowhere
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    payment_method_id = Column(Uuid(as_uuid=True), ForeignKey("payment_methods.id", ondelete="SET NULL"), nullable=True)
    description = Column(String(length=255), nullable=True)
    memo = Column(String(length=255), nullable=True)
    date = Column(Date, nullable=False, index=True)
    is_fixed = Column(Boolean(), nullable=False, default=False)
    installment_months = Column(Integer, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship(Category, lazy="joined")
    payment_method = relationship(PaymentMethod, lazy="joined")

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.date} user_id={self.user_id}>"
