# models/__init__.py
from .base import Base, CreatedAtMixin
from .user import User, UserRole, UserStatus
from .room import Room, RoomStatus
from .tenant import Tenant, TenantStatus
from .payment import Payment, PaymentStatus, PaymentMethod, PaymentType
from .expense import Expense

__all__ = [
     "Base",
     "CreatedAtMixin",
     "User",
     "UserRole",
     "UserStatus",
     "Room",
     "RoomStatus",
     "Tenant",
     "TenantStatus",
     "Payment",
     "PaymentStatus",
     "PaymentMethod",
     "PaymentType",
     "Expense",
]
