# schemas/expense.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ExpenseRequest(BaseModel):
     """Create/update body; title and a positive amount are checked in the route."""
     title: Optional[str] = None
     amount: Optional[Decimal] = None
     category: Optional[str] = None
     notes: Optional[str] = None


class ExpenseResponse(BaseModel):
     id: int
     title: str
     amount: float
     category: Optional[str] = None
     notes: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)
