# routers/rooms.py
"""
Room inventory and direct (admin) room assignment.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin, verify_token
from schemas.room import RoomAssignRequest, RoomCreate, RoomResponse
from services import room_service

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.post("/add", summary="Add a room")
def add_room(
     body: RoomCreate,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     room = room_service.create_room(db, body.room_number.strip(), body.type, body.rate, body.capacity)
     db.commit()
     return {
          "message": "Room added",
          "roomId": room.id,
          "room": RoomResponse.model_validate(room),
     }


@router.get("/list", summary="List rooms with occupancy")
def list_rooms(
     db: Session = Depends(get_session),
     principal: Principal = Depends(verify_token),
):
     """
     Room inventory. Occupancy counts approved tenants only and is computed
     at read time rather than taken from the stored counters.
     """
     return room_service.list_rooms(db)


@router.post("/assign", summary="Assign a tenant to a room")
def assign_room(
     body: RoomAssignRequest,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     """
     Move a tenant directly into a room and mark them approved.

     Unlike tenant approval this does not reset the tenant's balance.
     """
     room = room_service.assign_tenant_to_room(db, body.tenant_id, body.room_id)
     db.commit()
     return {
          "success": True,
          "message": "Tenant assigned successfully",
          "room_id": room.id,
          "tenant_id": body.tenant_id,
          "room": RoomResponse.model_validate(room),
     }
