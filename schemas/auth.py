# schemas/auth.py
"""
Pydantic schemas for registration and login.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.user import UserRole


class RegisterRequest(BaseModel):
     """Request body for POST /auth/register."""
     name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., min_length=3, max_length=255)
     password: str = Field(..., min_length=1)
     role: Optional[UserRole] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Juan Dela Cruz",
                    "email": "juan@example.com",
                    "password": "secret123",
               }
          }
     )


class LoginRequest(BaseModel):
     email: str
     password: str


class UserSummary(BaseModel):
     id: int
     name: str
     email: str
     role: str
     status: str

     model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
     message: str = "Login successful!"
     token: str
     user: UserSummary
