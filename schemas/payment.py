# schemas/payment.py
"""
Pydantic schemas for payment submission and adjudication.
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from models.payment import PaymentMethod, PaymentType


class ManualPaymentRequest(BaseModel):
     """Request body for POST /payments/admin/add."""
     tenant_id: int = Field(..., gt=0)
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     method: PaymentMethod = PaymentMethod.CASH
     payment_type: PaymentType = PaymentType.PARTIAL

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"tenant_id": 1, "amount": 2000.00, "method": "Cash", "payment_type": "partial"}
          }
     )
