# schemas/room.py
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class RoomCreate(BaseModel):
     """Schema for creating a room."""
     room_number: str = Field(..., min_length=1, max_length=50)
     type: Optional[str] = Field(None, max_length=100)
     rate: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Periodic charge")
     capacity: int = Field(..., ge=1, description="Maximum occupants")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"room_number": "101", "type": "Shared", "rate": 5000.00, "capacity": 2}
          }
     )


class RoomAssignRequest(BaseModel):
     tenant_id: int = Field(..., gt=0)
     room_id: int = Field(..., gt=0)


class RoomResponse(BaseModel):
     id: int
     room_number: str
     type: Optional[str] = None
     rate: float
     capacity: int
     current_occupancy: int
     available_slots: int
     status: str

     model_config = ConfigDict(from_attributes=True)
