# schemas/tenant.py
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class RoomRequest(BaseModel):
     """Request body for POST /tenants/request-room."""
     full_name: str = Field(..., min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     gender: Optional[str] = Field(None, max_length=20)
     address: Optional[str] = Field(None, max_length=500)
     emergency_contact: Optional[str] = Field(None, max_length=255)
     room_id: int = Field(..., gt=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "full_name": "Maria Santos",
                    "email": "maria@example.com",
                    "phone": "09171234567",
                    "gender": "female",
                    "address": "Cebu City",
                    "emergency_contact": "Jose Santos 09181234567",
                    "room_id": 1,
               }
          }
     )


class NotifyEmailRequest(BaseModel):
     to: Optional[str] = None
     subject: Optional[str] = None
     message: Optional[str] = None
