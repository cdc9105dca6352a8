# services/errors.py
"""
Domain error taxonomy.

Services raise these; main.py translates them into an HTTP status plus a JSON
``message`` (and any ``extra`` payload, e.g. alternative rooms for a full room).
"""
from typing import Any, Dict, Optional


class BoardingHouseError(Exception):
     """Base class for errors surfaced to API clients."""

     status_code = 500
     message = "Server error"

     def __init__(self, message: Optional[str] = None, **extra: Any):
          self.message = message or self.message
          self.extra: Dict[str, Any] = extra
          super().__init__(self.message)


class AuthError(BoardingHouseError):
     status_code = 401
     message = "Unauthorized"


class ForbiddenError(BoardingHouseError):
     status_code = 403
     message = "Forbidden"


class NotFoundError(BoardingHouseError):
     status_code = 404
     message = "Not found"


class TenantNotFoundError(NotFoundError):
     message = "Tenant not found"


class RoomNotFoundError(NotFoundError):
     message = "Room not found"


class PaymentNotFoundError(NotFoundError):
     message = "Payment not found"


class ExpenseNotFoundError(NotFoundError):
     message = "Expense not found"


class UserNotFoundError(NotFoundError):
     message = "User not found"


class ValidationError(BoardingHouseError):
     status_code = 400
     message = "Invalid input"


class ConflictError(BoardingHouseError):
     status_code = 400
     message = "Conflict"


class RoomFullError(ConflictError):
     message = "Room is already full. Please assign another room."

     def __init__(self, message: Optional[str] = None, available_rooms: Optional[list] = None):
          super().__init__(message)
          if available_rooms is not None:
               self.extra["availableRooms"] = available_rooms


class AlreadyFinalizedError(ConflictError):
     def __init__(self, status: str):
          super().__init__(f"Payment already {status}")
          self.status = status


class DuplicateEmailError(ConflictError):
     message = "Email already registered."


class ServerError(BoardingHouseError):
     status_code = 500
     message = "Internal server error"
