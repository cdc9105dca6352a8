# routers/tenants.py
"""
Tenant API routes.

Role-based access:
- Tenant (client): request a room, view own request, dashboard and balance summary
- Admin: list / approve / reject tenants, upcoming dues, notification email
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin, require_tenant
from schemas.tenant import NotifyEmailRequest, RoomRequest
from services import tenant_service
from services.errors import ValidationError
from utils.email import EmailError, send_notification_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@router.get("/all", summary="List tenants")
def list_tenants(
     month: Optional[int] = Query(None, ge=1, le=12, description="Creation month"),
     search: Optional[str] = Query(None, description="Match name, email or phone"),
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return tenant_service.list_tenants(db, month=month, search=search)


@router.get("/pending", summary="List pending tenants")
def list_pending(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return tenant_service.list_pending_tenants(db)


@router.get("/list-basic", summary="Tenant picker list")
def list_basic(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return tenant_service.list_basic(db)


@router.get("/upcoming-dues", summary="Approved tenants with a running cycle")
def upcoming_dues(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return tenant_service.upcoming_dues(db)


@router.patch("/approve/{tenant_id}", summary="Approve tenant")
def approve_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     """
     Approve a pending tenant into the room they requested.

     - Occupancy is recounted from approved tenants
     - A full room returns 400 with `availableRooms` suggestions
     - The tenant balance is reset to the room rate
     """
     room = tenant_service.approve_tenant(db, tenant_id)
     db.commit()
     return {
          "success": True,
          "message": "Tenant approved successfully",
          "tenantId": tenant_id,
          "room": room,
     }


@router.patch("/reject/{tenant_id}", summary="Reject tenant")
def reject_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     tenant_service.reject_tenant(db, tenant_id)
     db.commit()
     return {"success": True, "message": "Tenant rejected", "tenantId": tenant_id}


@router.post("/notify-email", summary="Send a notification email")
def notify_email(
     body: NotifyEmailRequest,
     principal: Principal = Depends(require_admin),
):
     if not body.to or not body.subject or not body.message:
          raise ValidationError("to, subject and message are required")
     try:
          send_notification_email(body.to, body.subject, body.message)
     except EmailError as e:
          logger.error("Notify email failed: %s", e)
          return JSONResponse(
               status_code=500,
               content={"success": False, "message": "Failed to send notification"},
          )
     return {"success": True, "message": "Notification sent"}


# ---------------------------------------------------------------------------
# Tenant (client)
# ---------------------------------------------------------------------------

@router.post("/request-room", summary="Request a room")
def request_room(
     body: RoomRequest,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     """Create or replace the caller's room request; it goes back to pending."""
     tenant, created = tenant_service.request_room(
          db,
          user_id=principal.user_id,
          full_name=body.full_name,
          email=body.email,
          phone=body.phone,
          gender=body.gender,
          address=body.address,
          emergency_contact=body.emergency_contact,
          room_id=body.room_id,
     )
     db.commit()
     return {
          "success": True,
          "message": "Room request submitted" if created else "Room request updated",
          "tenantId": tenant.id,
     }


@router.get("/my-request", summary="Own room request")
def my_request(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     request = tenant_service.my_request(db, principal.user_id)
     if request is None:
          return {"message": "No request found"}
     return request


@router.get("/dashboard", summary="Tenant dashboard")
def dashboard(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     request = tenant_service.my_request(db, principal.user_id)
     if request is None:
          return {
               "tenant": {
                    "tenant_name": "Unknown Tenant",
                    "room_number": None,
                    "type": None,
                    "rate": None,
                    "status": "No Request",
               }
          }
     return {
          "tenant": {
               "id": request["id"],
               "tenant_name": request["full_name"],
               "room_number": request["room_number"],
               "type": request["type"],
               "rate": request["rate"],
               "status": request["status"],
          }
     }


@router.get("/summary", summary="Balance summary")
def summary(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     tenant = tenant_service.tenant_summary(db, principal.user_id)
     if tenant is None:
          return {"success": False, "message": "Tenant not found"}
     return {"success": True, "tenant": tenant}
