# models/payment.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentStatus(str, enum.Enum):
     """Enumeration for payment adjudication status."""
     PENDING = "pending"
     PARTIAL = "partial"
     PAID = "paid"
     REJECTED = "rejected"


TERMINAL_PAYMENT_STATUSES = (PaymentStatus.PAID, PaymentStatus.REJECTED)


class PaymentMethod(str, enum.Enum):
     CASH = "Cash"
     GCASH = "GCash"


class PaymentType(str, enum.Enum):
     FULL = "full"
     PARTIAL = "partial"


def _enum_values(enum_cls):
     return [member.value for member in enum_cls]


class Payment(Base):
     """
     Payment model - a tenant's claimed payment awaiting admin adjudication.

     Created as PENDING; approval moves it to PAID or PARTIAL and deducts the
     tenant balance, rejection moves it to REJECTED. PAID and REJECTED are final.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(
          Integer,
          ForeignKey("tenants.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     amount = Column(Numeric(12, 2), nullable=False)
     # Total taken off the tenant balance by approvals so far
     applied_amount = Column(Numeric(12, 2), default=0, nullable=False)
     method = Column(
          Enum(PaymentMethod, name="payment_method", values_callable=_enum_values),
          default=PaymentMethod.CASH,
          nullable=False
     )
     receipt = Column(String(500), nullable=True)  # public path under /uploads
     payment_type = Column(
          Enum(PaymentType, name="payment_type", values_callable=_enum_values),
          default=PaymentType.PARTIAL,
          nullable=False
     )
     status = Column(
          Enum(PaymentStatus, name="payment_status", values_callable=_enum_values),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

     # Relationships
     tenant = relationship("Tenant", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, amount={self.amount}, status='{self.status.value}')>"

     @property
     def is_final(self) -> bool:
          return self.status in TERMINAL_PAYMENT_STATUSES

     def mark_as_rejected(self) -> None:
          self.status = PaymentStatus.REJECTED
