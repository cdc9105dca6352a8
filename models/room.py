# models/room.py
import enum
from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class RoomStatus(str, enum.Enum):
     AVAILABLE = "available"
     OCCUPIED = "occupied"


class Room(CreatedAtMixin, Base):
     """
     Room model - rentable room inventory.

     current_occupancy / available_slots / status are a denormalized view of the
     approved tenants referencing the room. They are refreshed in the same
     transaction that changes tenant approval and are never the source of truth.
     """
     __tablename__ = "rooms"
     __table_args__ = (
          CheckConstraint("available_slots >= 0", name="ck_rooms_available_slots"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     room_number = Column(String(50), unique=True, nullable=False)
     type = Column(String(100), nullable=True)
     rate = Column(Numeric(12, 2), nullable=False, default=0)
     capacity = Column(Integer, nullable=False, default=1)

     current_occupancy = Column(Integer, nullable=False, default=0)
     available_slots = Column(Integer, nullable=False, default=0)
     status = Column(String(20), default=RoomStatus.AVAILABLE.value, nullable=False)  # available, occupied


     # Relationships
     tenants = relationship("Tenant", back_populates="room")

     def __repr__(self):
          return f"<Room(id={self.id}, room_number='{self.room_number}', status='{self.status}')>"

     def apply_occupancy(self, occupancy: int) -> None:
          """Refresh the occupancy counters from an approved-tenant count."""
          self.current_occupancy = occupancy
          self.available_slots = max(self.capacity - occupancy, 0)
          self.status = (
               RoomStatus.OCCUPIED.value if self.available_slots <= 0 else RoomStatus.AVAILABLE.value
          )
