# routers/payments.py
"""
Payment API.

Tenants submit payments (optionally with a receipt upload); admins approve or
reject them. Balance changes only happen on admin approval/rejection.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin, require_tenant
from models.payment import PaymentMethod, PaymentStatus, PaymentType
from schemas.payment import ManualPaymentRequest
from services import payment_service, report_service

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/add", summary="Submit a payment")
def submit_payment(
     amount: Decimal = Form(...),
     method: PaymentMethod = Form(PaymentMethod.CASH),
     payment_type: PaymentType = Form(PaymentType.PARTIAL),
     receipt: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     """
     Record the caller's payment as pending. The receipt (png/jpg/pdf) is
     stored under /uploads/gcash_receipts.
     """
     payment = payment_service.submit_payment(
          db,
          user_id=principal.user_id,
          amount=amount,
          method=method,
          payment_type=payment_type,
          receipt=receipt,
     )
     db.commit()
     return {
          "success": True,
          "message": "Payment submitted",
          "paymentId": payment.id,
          "status": payment.status.value,
     }


@router.get("/my-payments", summary="Own balance and payments")
def my_payments(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     return payment_service.my_payments(db, principal.user_id)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@router.get("/admin/all", summary="List all payments")
def list_payments(
     payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return payment_service.list_all_payments(db, status=payment_status)


@router.post("/admin/add", status_code=status.HTTP_201_CREATED, summary="Record a payment manually")
def add_manual_payment(
     body: ManualPaymentRequest,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     payment = payment_service.record_manual_payment(
          db, body.tenant_id, body.amount, body.method, body.payment_type
     )
     db.commit()
     return {
          "success": True,
          "message": "Payment recorded",
          "paymentId": payment.id,
          "status": payment.status.value,
     }


@router.patch("/admin/approve/{payment_id}", summary="Approve payment")
def approve_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     """
     Deduct the payment from the tenant balance.
     Status becomes `paid` when nothing is left owing, otherwise `partial`.
     """
     result = payment_service.approve_payment(db, payment_id)
     db.commit()
     return {"success": True, "message": "Payment approved", **result}


@router.patch("/admin/reject/{payment_id}", summary="Reject payment")
def reject_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     result = payment_service.reject_payment(db, payment_id)
     db.commit()
     return {"success": True, "message": "Payment rejected", **result}


@router.get("/admin/revenue", summary="Revenue by payment status")
def revenue(
     month: Optional[int] = Query(None, description="Month of the current year (1-12)"),
     start: Optional[date] = Query(None, description="First day, inclusive"),
     end: Optional[date] = Query(None, description="Last day, inclusive"),
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return report_service.revenue(db, month=month, start=start, end=end)
