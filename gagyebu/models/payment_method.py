# gagyebu/models/payment_method.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Integer, Boolean, DateTime, Enum, Uuid
from gagyebu.core.database import Base

class PaymentMethodType(str, enum.Enum):
    card = "card"
    bank = "bank"
    cash = "cash"
    other = "other"

class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    type = Column(Enum(PaymentMethodType, name="payment_method_type"), nullable=False, default=PaymentMethodType.card)
    color = Column(String(length=20), nullable=False)
    icon = Column(String(length=50), nullable=False)
    is_default = Column(Boolean(), nullable=False, default=False)

    # Card only; null for every other type
    billing_day = Column(Integer, nullable=True)        # day the bill is paid, 1-28
    billing_start_day = Column(Integer, nullable=True)  # first day of the usage period
    billing_end_day = Column(Integer, nullable=True)    # last day of the usage period, 0 = end of month

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<PaymentMethod name={self.name} type={self.type} user_id={self.user_id}>"
