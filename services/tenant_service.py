# services/tenant_service.py
"""
Tenant Service - room requests and the approval workflow.

Approval is the only path that (re)initializes a tenant's balance: the
balance is set to the full room rate every time a tenant is approved.
"""
import logging
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import extract, or_
from sqlalchemy.orm import Session

from config import settings
from database import for_update
from models import Room, Tenant, TenantStatus
from services.errors import (
     ConflictError,
     RoomFullError,
     RoomNotFoundError,
     TenantNotFoundError,
     ValidationError,
)
from services.room_service import (
     count_approved_occupants,
     lock_room,
     rooms_without_approved_tenants,
)

logger = logging.getLogger(__name__)

DUE_CYCLE_DAYS = 30


def get_tenant_for_user(db: Session, user_id: int) -> Optional[Tenant]:
     return db.query(Tenant).filter(Tenant.user_id == user_id).first()


def _check_gender_policy(db: Session, tenant: Tenant, room: Room) -> None:
     """Rooms are single-gender: a tenant may only join occupants of the same gender."""
     if not tenant.gender:
          return
     occupant_genders = {
          (gender or "").strip().lower()
          for (gender,) in db.query(Tenant.gender).filter(
               Tenant.room_id == room.id,
               Tenant.status == TenantStatus.APPROVED.value,
               Tenant.id != tenant.id,
          )
     }
     occupant_genders.discard("")
     if occupant_genders and occupant_genders != {tenant.gender.strip().lower()}:
          raise ConflictError(f"Room {room.room_number} is occupied by tenants of another gender")


def approve_tenant(db: Session, tenant_id: int, enforce_gender: Optional[bool] = None) -> dict:
     """
     Approve a pending tenant into the room they requested.

     Occupancy is recounted from approved tenants. When the room is full the
     tenant and room are left untouched and RoomFullError carries the rooms
     that currently have no approved occupants.

     Returns:
          Summary of the room after approval.

     Raises:
          TenantNotFoundError, RoomNotFoundError, ValidationError,
          ConflictError, RoomFullError
     """
     tenant = for_update(db.query(Tenant).filter(Tenant.id == tenant_id), Tenant).first()
     if not tenant:
          raise TenantNotFoundError()

     if not tenant.room_id:
          raise ValidationError("Tenant has no assigned room")

     if tenant.status == TenantStatus.APPROVED.value:
          raise ConflictError("Tenant is already approved")

     room = lock_room(db, tenant.room_id)
     if not room:
          raise RoomNotFoundError()

     if enforce_gender is None:
          enforce_gender = settings.ROOM_GENDER_POLICY
     if enforce_gender:
          _check_gender_policy(db, tenant, room)

     occupancy = count_approved_occupants(db, room.id)
     if occupancy >= room.capacity:
          logger.warning(
               "Approval of tenant %s refused: room %s is full (%s/%s)",
               tenant.id, room.room_number, occupancy, room.capacity,
          )
          raise RoomFullError(available_rooms=rooms_without_approved_tenants(db))

     tenant.status = TenantStatus.APPROVED.value
     tenant.balance = room.rate
     room.apply_occupancy(occupancy + 1)
     db.flush()

     logger.info("Tenant %s approved into room %s, balance=%s", tenant.id, room.room_number, tenant.balance)
     return {
          "room_number": room.room_number,
          "type": room.type,
          "capacity": room.capacity,
          "current_occupancy": room.current_occupancy,
          "available_slots": room.available_slots,
          "status": room.status,
     }


def reject_tenant(db: Session, tenant_id: int) -> Tenant:
     tenant = for_update(db.query(Tenant).filter(Tenant.id == tenant_id), Tenant).first()
     if not tenant:
          raise TenantNotFoundError()
     if tenant.status == TenantStatus.APPROVED.value:
          raise ConflictError("Approved tenants cannot be rejected")

     tenant.status = TenantStatus.REJECTED.value
     db.flush()
     logger.info("Tenant %s rejected", tenant.id)
     return tenant


def request_room(
     db: Session,
     user_id: int,
     full_name: str,
     email: Optional[str],
     phone: Optional[str],
     gender: Optional[str],
     address: Optional[str],
     emergency_contact: Optional[str],
     room_id: int,
) -> tuple:
     """
     Create or replace the user's room request.

     Returns:
          (tenant, created) where created is False when an existing request was updated
     """
     room = db.query(Room).filter(Room.id == room_id).first()
     if not room:
          raise RoomNotFoundError()
     room_rate = room.rate or Decimal("0")

     fields = dict(
          full_name=full_name,
          email=email,
          phone=phone,
          gender=gender,
          address=address,
          emergency_contact=emergency_contact,
          room_id=room.id,
          status=TenantStatus.PENDING.value,
          balance=room_rate,
     )

     tenant = for_update(db.query(Tenant).filter(Tenant.user_id == user_id), Tenant).first()
     created = tenant is None
     if created:
          tenant = Tenant(user_id=user_id, **fields)
          db.add(tenant)
     else:
          previous_room_id = tenant.room_id if tenant.status == TenantStatus.APPROVED.value else None
          for key, value in fields.items():
               setattr(tenant, key, value)
          if previous_room_id:
               # Leaving an approved room frees a slot there
               previous_room = lock_room(db, previous_room_id)
               if previous_room:
                    db.flush()
                    previous_room.apply_occupancy(count_approved_occupants(db, previous_room.id))

     db.flush()
     logger.info("Room request %s for user %s (room %s)", "created" if created else "updated", user_id, room.room_number)
     return tenant, created


def _tenant_row(tenant: Tenant) -> dict:
     room = tenant.room
     return {
          "id": tenant.id,
          "full_name": tenant.full_name,
          "email": tenant.email,
          "phone": tenant.phone,
          "gender": tenant.gender,
          "address": tenant.address,
          "emergency_contact": tenant.emergency_contact,
          "room_id": tenant.room_id,
          "room_number": room.room_number if room else None,
          "type": room.type if room else None,
          "rate": float(room.rate) if room and room.rate is not None else None,
          "status": tenant.status,
          "balance": float(tenant.balance or 0),
          "created_at": tenant.created_at,
     }


def list_tenants(db: Session, month: Optional[int] = None, search: Optional[str] = None) -> List[dict]:
     query = db.query(Tenant)
     if month:
          query = query.filter(extract("month", Tenant.created_at) == month)
     if search:
          pattern = f"%{search}%"
          query = query.filter(or_(
               Tenant.full_name.like(pattern),
               Tenant.email.like(pattern),
               Tenant.phone.like(pattern),
          ))
     return [_tenant_row(t) for t in query.order_by(Tenant.created_at.desc(), Tenant.id.desc()).all()]


def list_pending_tenants(db: Session) -> List[dict]:
     tenants = (
          db.query(Tenant)
          .filter(Tenant.status == TenantStatus.PENDING.value)
          .order_by(Tenant.created_at, Tenant.id)
          .all()
     )
     return [
          {
               "id": t.id,
               "full_name": t.full_name,
               "email": t.email,
               "phone": t.phone,
               "gender": t.gender,
               "status": t.status,
               "room_number": t.room.room_number if t.room else None,
               "type": t.room.type if t.room else None,
          }
          for t in tenants
     ]


def list_basic(db: Session) -> List[dict]:
     return [
          {"id": t.id, "full_name": t.full_name, "status": t.status, "room_id": t.room_id}
          for t in db.query(Tenant).order_by(Tenant.full_name).all()
     ]


def my_request(db: Session, user_id: int) -> Optional[dict]:
     tenant = get_tenant_for_user(db, user_id)
     return _tenant_row(tenant) if tenant else None


def effective_balance(tenant: Tenant) -> Decimal:
     """Outstanding balance, falling back to the room rate when never initialized."""
     balance = tenant.balance or Decimal("0")
     if balance == 0 and tenant.room is not None:
          return tenant.room.rate or Decimal("0")
     return balance


def tenant_summary(db: Session, user_id: int) -> Optional[dict]:
     tenant = get_tenant_for_user(db, user_id)
     if not tenant:
          return None
     room = tenant.room
     return {
          "room_number": room.room_number if room else None,
          "room_rate": float(room.rate or 0) if room else 0.0,
          "balance": float(effective_balance(tenant)),
     }


def upcoming_dues(db: Session, now: Optional[datetime] = None) -> List[dict]:
     """Approved tenants whose 30-day cycle ends today or later."""
     now = now or datetime.now()
     cutoff = datetime.combine(now.date(), time.min) - timedelta(days=DUE_CYCLE_DAYS)
     tenants = (
          db.query(Tenant)
          .filter(Tenant.status == TenantStatus.APPROVED.value, Tenant.created_at >= cutoff)
          .order_by(Tenant.created_at)
          .all()
     )
     return [
          {
               "id": t.id,
               "full_name": t.full_name,
               "email": t.email,
               "phone": t.phone,
               "room_number": t.room.room_number if t.room else None,
               "type": t.room.type if t.room else None,
               "created_at": t.created_at,
               "due_date": t.created_at + timedelta(days=DUE_CYCLE_DAYS),
          }
          for t in tenants
     ]
