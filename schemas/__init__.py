# schemas/__init__.py
from .auth import RegisterRequest, LoginRequest, LoginResponse, UserSummary
from .room import RoomCreate, RoomAssignRequest, RoomResponse
from .tenant import RoomRequest, NotifyEmailRequest
from .payment import ManualPaymentRequest
from .expense import ExpenseRequest, ExpenseResponse
from .user import UserUpdate, UserResponse

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "LoginResponse",
     "UserSummary",
     "RoomCreate",
     "RoomAssignRequest",
     "RoomResponse",
     "RoomRequest",
     "NotifyEmailRequest",
     "ManualPaymentRequest",
     "ExpenseRequest",
     "ExpenseResponse",
     "UserUpdate",
     "UserResponse",
]
