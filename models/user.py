# models/user.py
import enum
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class UserRole(str, enum.Enum):
     """Roles carried in the auth token."""
     ADMIN = "admin"
     CLIENT = "client"


class UserStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"


class User(CreatedAtMixin, Base):
     """
     User model - central authentication table.
     A client user may own one tenant profile (room request).
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     role = Column(String(20), default=UserRole.CLIENT.value, nullable=False)  # admin, client
     status = Column(String(20), default=UserStatus.ACTIVE.value, nullable=False)  # active, inactive

     # Relationships
     tenant = relationship("Tenant", back_populates="user", uselist=False)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

     @property
     def is_active(self) -> bool:
          return self.status == UserStatus.ACTIVE.value
