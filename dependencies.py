# dependencies.py
"""
Auth guard shared by all routers.

The bearer token is decoded once per request into a typed ``Principal``;
routes depend on ``require_admin`` / ``require_tenant`` instead of inspecting
claims themselves.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from config import settings
from models.user import UserRole
from services.errors import AuthError, ForbiddenError

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Older tokens used "tenant" for client accounts
_ROLE_ALIASES = {"tenant": UserRole.CLIENT}


@dataclass(frozen=True)
class Principal:
     user_id: int
     role: UserRole

     @property
     def is_admin(self) -> bool:
          return self.role == UserRole.ADMIN


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
     return pwd_context.verify(password, hashed)


def create_access_token(user_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
     expires = datetime.now(timezone.utc) + timedelta(
          minutes=expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
     )
     payload = {"id": user_id, "role": role, "exp": expires}
     return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _parse_role(value) -> UserRole:
     if value in _ROLE_ALIASES:
          return _ROLE_ALIASES[value]
     try:
          return UserRole(value)
     except ValueError:
          raise ForbiddenError()


# Token Auth Dependency
def verify_token(request: Request) -> Principal:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise AuthError("Unauthorized")
     token = auth.split(" ", 1)[1].strip()
     try:
          payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
     except ExpiredSignatureError:
          raise AuthError("Token expired")
     except JWTError:
          raise AuthError("Invalid token")

     user_id = payload.get("id")
     if user_id is None:
          raise AuthError("Invalid token")
     return Principal(user_id=int(user_id), role=_parse_role(payload.get("role")))


def require_admin(principal: Principal = Depends(verify_token)) -> Principal:
     if not principal.is_admin:
          raise ForbiddenError()
     return principal


def require_tenant(principal: Principal = Depends(verify_token)) -> Principal:
     if principal.role != UserRole.CLIENT:
          raise ForbiddenError()
     return principal
