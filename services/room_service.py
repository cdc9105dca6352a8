# services/room_service.py
"""
Room Service - room inventory, occupancy and direct assignment.

Occupancy is always the number of APPROVED tenants referencing a room,
counted from the tenant rows at decision time. The counters stored on the
room row are refreshed from that count in the same unit of work.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from database import for_update
from models import Room, Tenant, TenantStatus
from services.errors import (
     ConflictError,
     RoomFullError,
     RoomNotFoundError,
     TenantNotFoundError,
     ValidationError,
)

logger = logging.getLogger(__name__)


def count_approved_occupants(db: Session, room_id: int) -> int:
     """Number of approved tenants currently referencing the room."""
     return (
          db.query(func.count(Tenant.id))
          .filter(Tenant.room_id == room_id, Tenant.status == TenantStatus.APPROVED.value)
          .scalar()
     ) or 0


def refresh_room_occupancy(db: Session, room: Room) -> int:
     """Recompute the room's occupancy counters from tenant rows."""
     db.flush()
     occupancy = count_approved_occupants(db, room.id)
     room.apply_occupancy(occupancy)
     return occupancy


def lock_room(db: Session, room_id: int) -> Optional[Room]:
     return for_update(db.query(Room).filter(Room.id == room_id), Room).first()


def rooms_without_approved_tenants(db: Session) -> List[dict]:
     """
     Alternative rooms offered when a requested room is full.

     Only approved tenants count, so a room filled with pending requests
     is still offered.
     """
     occupied_ids = (
          db.query(Tenant.room_id)
          .filter(Tenant.status == TenantStatus.APPROVED.value, Tenant.room_id.isnot(None))
     )
     rooms = (
          db.query(Room)
          .filter(Room.id.notin_(occupied_ids))
          .order_by(Room.room_number)
          .all()
     )
     return [
          {
               "id": room.id,
               "room_number": room.room_number,
               "type": room.type,
               "capacity": room.capacity,
          }
          for room in rooms
     ]


def create_room(db: Session, room_number: str, type: Optional[str], rate: Decimal, capacity: int) -> Room:
     if db.query(Room.id).filter(Room.room_number == room_number).first():
          raise ConflictError(f"Room {room_number} already exists")
     if capacity < 1:
          raise ValidationError("Capacity must be at least 1")

     room = Room(room_number=room_number, type=type, rate=rate, capacity=capacity)
     room.apply_occupancy(0)
     db.add(room)
     db.flush()
     logger.info("Room %s created (capacity=%s, rate=%s)", room.room_number, capacity, rate)
     return room


def list_rooms(db: Session) -> List[dict]:
     """Room inventory with occupancy computed from approved tenants."""
     occupancy = dict(
          db.query(Tenant.room_id, func.count(Tenant.id))
          .filter(Tenant.status == TenantStatus.APPROVED.value, Tenant.room_id.isnot(None))
          .group_by(Tenant.room_id)
          .all()
     )
     rows = []
     for room in db.query(Room).order_by(Room.room_number).all():
          occupied = occupancy.get(room.id, 0)
          slots = max(room.capacity - occupied, 0)
          rows.append({
               "id": room.id,
               "room_number": room.room_number,
               "type": room.type,
               "rate": float(room.rate or 0),
               "capacity": room.capacity,
               "current_occupancy": occupied,
               "available_slots": slots,
               "status": "occupied" if slots <= 0 else "available",
               "availability": "Full" if slots <= 0 else "Available",
          })
     return rows


def assign_tenant_to_room(db: Session, tenant_id: int, room_id: int) -> Room:
     """
     Admin reassignment of a tenant straight into a room.

     Marks the tenant approved without touching the balance; balance
     initialization only happens through tenant approval.

     Raises:
          RoomNotFoundError, TenantNotFoundError, RoomFullError, ConflictError
     """
     # Tenant before room, the same lock order as tenant approval
     tenant = for_update(db.query(Tenant).filter(Tenant.id == tenant_id), Tenant).first()
     if not tenant:
          raise TenantNotFoundError()

     room = lock_room(db, room_id)
     if not room:
          raise RoomNotFoundError()

     already_here = tenant.room_id == room.id and tenant.status == TenantStatus.APPROVED.value
     if already_here:
          raise ConflictError("Tenant is already assigned to this room")

     occupancy = count_approved_occupants(db, room.id)
     if occupancy >= room.capacity:
          logger.warning("Assignment refused: room %s is full (%s/%s)", room.room_number, occupancy, room.capacity)
          raise RoomFullError("Room is already full")

     previous_room_id = tenant.room_id if tenant.status == TenantStatus.APPROVED.value else None

     tenant.room_id = room.id
     tenant.status = TenantStatus.APPROVED.value
     room.apply_occupancy(occupancy + 1)

     if previous_room_id and previous_room_id != room.id:
          previous_room = lock_room(db, previous_room_id)
          if previous_room:
               refresh_room_occupancy(db, previous_room)

     db.flush()
     logger.info("Tenant %s assigned to room %s", tenant.id, room.room_number)
     return room
