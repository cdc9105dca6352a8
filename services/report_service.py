# services/report_service.py
"""
Read-only aggregates for the admin dashboard.
"""
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from models import Payment, PaymentStatus, Room, Tenant, User
from services.errors import ValidationError

COLLECTED_STATUSES = (PaymentStatus.PAID, PaymentStatus.PARTIAL)


def dashboard_stats(db: Session) -> dict:
     return {
          "rooms": db.query(func.count(Room.id)).scalar() or 0,
          "tenants": db.query(func.count(Tenant.id)).scalar() or 0,
          "payments": db.query(func.count(Payment.id)).scalar() or 0,
          "users": db.query(func.count(User.id)).scalar() or 0,
     }


def revenue(
     db: Session,
     month: Optional[int] = None,
     start: Optional[date] = None,
     end: Optional[date] = None,
     today: Optional[date] = None,
) -> dict:
     """
     Payment totals grouped by status.

     A month filter always refers to the current calendar year. Without a
     month, start/end bound the creation date (both inclusive).
     """
     query = db.query(
          Payment.status,
          func.count(Payment.id),
          func.coalesce(func.sum(Payment.amount), 0),
     )

     if month is not None:
          if not 1 <= month <= 12:
               raise ValidationError("Month must be between 1 and 12")
          year = (today or date.today()).year
          query = query.filter(
               extract("year", Payment.created_at) == year,
               extract("month", Payment.created_at) == month,
          )
     else:
          if start and end and start > end:
               raise ValidationError("start must not be after end")
          if start:
               query = query.filter(Payment.created_at >= datetime.combine(start, datetime.min.time()))
          if end:
               query = query.filter(Payment.created_at < datetime.combine(end + timedelta(days=1), datetime.min.time()))

     breakdown = []
     total = 0.0
     count = 0
     for status, status_count, amount in query.group_by(Payment.status).all():
          amount = float(amount or 0)
          breakdown.append({"status": status.value, "count": status_count, "amount": amount})
          if status in COLLECTED_STATUSES:
               total += amount
               count += status_count

     breakdown.sort(key=lambda row: row["status"])
     return {"total": round(total, 2), "count": count, "breakdown": breakdown}
