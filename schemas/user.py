# schemas/user.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.user import UserRole, UserStatus


class UserUpdate(BaseModel):
     """Only provided fields are updated."""
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = Field(None, min_length=3, max_length=255)
     role: Optional[UserRole] = None
     status: Optional[UserStatus] = None


class UserResponse(BaseModel):
     id: int
     name: str
     email: str
     role: str
     status: str
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)
