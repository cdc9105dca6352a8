# models/tenant.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class TenantStatus(str, enum.Enum):
     PENDING = "pending"
     APPROVED = "approved"
     REJECTED = "rejected"


class Tenant(CreatedAtMixin, Base):
     """
     Tenant model - room request / occupancy profile of a client user.
     balance is the amount currently owed; only meaningful once approved.
     """
     __tablename__ = "tenants"
     __table_args__ = (
          # One request per user; detached rows (user deleted) may share NULL
          Index(
               "ux_tenants_user_id",
               "user_id",
               unique=True,
               mssql_where=text("user_id IS NOT NULL"),
               postgresql_where=text("user_id IS NOT NULL"),
               sqlite_where=text("user_id IS NOT NULL"),
          ),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)

     # Personal info
     full_name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     gender = Column(String(20), nullable=True)
     address = Column(String(500), nullable=True)
     emergency_contact = Column(String(255), nullable=True)

     # Status
     status = Column(String(20), default=TenantStatus.PENDING.value, nullable=False, index=True)
     balance = Column(Numeric(12, 2), default=0, nullable=False)

     # Timestamps

     # Relationships
     user = relationship("User", back_populates="tenant")
     room = relationship("Room", back_populates="tenants")
     payments = relationship("Payment", back_populates="tenant", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.full_name}', status='{self.status}')>"
