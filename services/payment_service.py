# services/payment_service.py
"""
Payment Service - submission and admin adjudication of tenant payments.

A submitted payment never touches the tenant balance. Only approval deducts:

     new_balance = max(0, current_balance - amount)
     status      = PAID if new_balance == 0 else PARTIAL

where current_balance falls back to the room rate when the stored balance
was never initialized (zero). PAID and REJECTED are final.
"""
import logging
import os
import shutil
import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from config import settings
from database import for_update
from models import Payment, PaymentMethod, PaymentStatus, PaymentType, Tenant
from services.errors import (
     AlreadyFinalizedError,
     PaymentNotFoundError,
     TenantNotFoundError,
     ValidationError,
)
from services.tenant_service import get_tenant_for_user

logger = logging.getLogger(__name__)

RECEIPT_SUBDIR = "gcash_receipts"
ALLOWED_RECEIPT_EXTENSIONS = (".png", ".jpg", ".jpeg", ".pdf")


# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


def _normalize_amount(amount) -> Decimal:
     try:
          value = Decimal(str(amount))
          if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
               raise ValidationError("Invalid amount")
          return value.quantize(Decimal("0.01"))
     except (ArithmeticError, ValueError):
          raise ValidationError("Invalid amount")


def save_receipt(upload, upload_root: Optional[str] = None) -> tuple:
     """
     Write an uploaded receipt to disk.

     Returns:
          (public_path, file_path) - public_path is what gets stored on the payment
     """
     extension = os.path.splitext(upload.filename or "")[-1].lower()
     if extension not in ALLOWED_RECEIPT_EXTENSIONS:
          raise ValidationError("Invalid receipt file type")

     directory = os.path.join(upload_root or settings.UPLOAD_DIR, RECEIPT_SUBDIR)
     os.makedirs(directory, exist_ok=True)
     filename = f"{uuid.uuid4().hex}{extension}"
     file_path = os.path.join(directory, filename)
     with open(file_path, "wb") as buffer:
          shutil.copyfileobj(upload.file, buffer)
     return f"/uploads/{RECEIPT_SUBDIR}/{filename}", file_path


def create_payment(
     db: Session,
     tenant: Tenant,
     amount,
     method: PaymentMethod = PaymentMethod.CASH,
     payment_type: PaymentType = PaymentType.PARTIAL,
     receipt: Optional[str] = None,
) -> Payment:
     payment = Payment(
          tenant_id=tenant.id,
          amount=_normalize_amount(amount),
          method=method,
          payment_type=payment_type,
          receipt=receipt,
          status=PaymentStatus.PENDING,
     )
     db.add(payment)
     db.flush()
     logger.info("Payment %s recorded for tenant %s: %s via %s", payment.id, tenant.id, payment.amount, method.value)
     return payment


def submit_payment(
     db: Session,
     user_id: int,
     amount,
     method: PaymentMethod = PaymentMethod.CASH,
     payment_type: PaymentType = PaymentType.PARTIAL,
     receipt=None,
) -> Payment:
     """
     Record a tenant's claimed payment for later adjudication.

     The receipt file (if any) is written first and removed again when the
     payment row cannot be recorded.
     """
     amount = _normalize_amount(amount)
     tenant = get_tenant_for_user(db, user_id)
     if not tenant:
          raise TenantNotFoundError()

     receipt_path = file_path = None
     if receipt is not None and receipt.filename:
          receipt_path, file_path = save_receipt(receipt)

     try:
          return create_payment(db, tenant, amount, method, payment_type, receipt_path)
     except Exception:
          if file_path and os.path.exists(file_path):
               os.remove(file_path)
          raise


def record_manual_payment(
     db: Session,
     tenant_id: int,
     amount,
     method: PaymentMethod = PaymentMethod.CASH,
     payment_type: PaymentType = PaymentType.PARTIAL,
) -> Payment:
     """Admin-entered payment; goes through the same approval as tenant submissions."""
     amount = _normalize_amount(amount)
     tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
     if not tenant:
          raise TenantNotFoundError()
     return create_payment(db, tenant, amount, method, payment_type)


def _lock_payment(db: Session, payment_id: int) -> Payment:
     payment = for_update(db.query(Payment).filter(Payment.id == payment_id), Payment).first()
     if not payment:
          raise PaymentNotFoundError()
     if payment.is_final:
          raise AlreadyFinalizedError(payment.status.value)
     return payment


def _lock_tenant(db: Session, tenant_id: int) -> Tenant:
     tenant = for_update(db.query(Tenant).filter(Tenant.id == tenant_id), Tenant).first()
     if not tenant:
          raise TenantNotFoundError()
     return tenant


def approve_payment(db: Session, payment_id: int) -> dict:
     """
     Approve a pending or partial payment, deducting it from the tenant balance.

     Returns:
          {"status": new payment status, "balance": tenant balance after approval}

     Raises:
          PaymentNotFoundError, AlreadyFinalizedError
     """
     payment = _lock_payment(db, payment_id)
     tenant = _lock_tenant(db, payment.tenant_id)

     current = tenant.balance or Decimal("0")
     if current == 0:
          room_rate = tenant.room.rate if tenant.room is not None else None
          current = room_rate or Decimal("0")

     new_balance = max(Decimal("0"), current - payment.amount)
     new_status = PaymentStatus.PAID if new_balance == 0 else PaymentStatus.PARTIAL

     tenant.balance = new_balance
     payment.applied_amount = (payment.applied_amount or Decimal("0")) + (current - new_balance)
     payment.status = new_status
     db.flush()

     logger.info(
          "Payment %s approved as %s; tenant %s balance %s -> %s",
          payment.id, new_status.value, tenant.id, current, new_balance,
     )
     return {"status": new_status.value, "balance": float(new_balance)}


def reject_payment(db: Session, payment_id: int) -> dict:
     """
     Reject a pending or partial payment.

     A PARTIAL payment has already been deducted from the tenant balance,
     possibly more than once, so rejecting it restores everything its
     approvals took off. Rejecting a PENDING payment has no balance effect.
     """
     payment = _lock_payment(db, payment_id)
     result = {"status": PaymentStatus.REJECTED.value}

     if payment.status == PaymentStatus.PARTIAL:
          tenant = _lock_tenant(db, payment.tenant_id)
          restored = payment.applied_amount or Decimal("0")
          tenant.balance = (tenant.balance or Decimal("0")) + restored
          payment.applied_amount = Decimal("0")
          result["balance"] = float(tenant.balance)
          logger.info("Partial payment %s rejected; restored %s to tenant %s", payment.id, restored, tenant.id)
     else:
          logger.info("Payment %s rejected", payment.id)

     payment.mark_as_rejected()
     db.flush()
     return result


def _payment_row(payment: Payment) -> dict:
     return {
          "id": payment.id,
          "amount": float(payment.amount),
          "method": payment.method.value,
          "receipt": payment.receipt,
          "status": payment.status.value,
          "payment_type": payment.payment_type.value,
          "created_at": payment.created_at,
     }


def my_payments(db: Session, user_id: int) -> dict:
     tenant = get_tenant_for_user(db, user_id)
     if not tenant:
          raise TenantNotFoundError()
     room = tenant.room
     payments = (
          db.query(Payment)
          .filter(Payment.tenant_id == tenant.id)
          .order_by(Payment.created_at.desc(), Payment.id.desc())
          .all()
     )
     return {
          "tenant": {
               "tenant_id": tenant.id,
               "balance": float(tenant.balance or 0),
               "room_rate": float(room.rate or 0) if room else 0.0,
               "room_number": room.room_number if room else None,
          },
          "payments": [_payment_row(p) for p in payments],
     }


def list_all_payments(db: Session, status: Optional[PaymentStatus] = None) -> List[dict]:
     query = db.query(Payment).join(Tenant, Tenant.id == Payment.tenant_id)
     if status is not None:
          query = query.filter(Payment.status == status)
     rows = []
     for payment in query.order_by(Payment.created_at.desc(), Payment.id.desc()).all():
          tenant = payment.tenant
          row = _payment_row(payment)
          row.update({
               "tenant_id": tenant.id,
               "tenant_name": tenant.full_name,
               "room_number": tenant.room.room_number if tenant.room else None,
               "room_rate": float(tenant.room.rate or 0) if tenant.room else None,
               "balance": float(tenant.balance or 0),
          })
          rows.append(row)
     return rows
