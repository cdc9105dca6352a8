# services/__init__.py
from . import payment_service, report_service, room_service, tenant_service
from .errors import (
     BoardingHouseError,
     AuthError,
     ForbiddenError,
     NotFoundError,
     TenantNotFoundError,
     RoomNotFoundError,
     PaymentNotFoundError,
     ValidationError,
     ConflictError,
     RoomFullError,
     AlreadyFinalizedError,
     DuplicateEmailError,
     ServerError,
)

__all__ = [
     "payment_service",
     "report_service",
     "room_service",
     "tenant_service",
     "BoardingHouseError",
     "AuthError",
     "ForbiddenError",
     "NotFoundError",
     "TenantNotFoundError",
     "RoomNotFoundError",
     "PaymentNotFoundError",
     "ValidationError",
     "ConflictError",
     "RoomFullError",
     "AlreadyFinalizedError",
     "DuplicateEmailError",
     "ServerError",
]
