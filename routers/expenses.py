# routers/expenses.py
"""
Expense log (admin only).
"""
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin
from models import Expense
from schemas.expense import ExpenseRequest, ExpenseResponse
from services.errors import ExpenseNotFoundError, ValidationError

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def _validated_fields(body: ExpenseRequest) -> dict:
     if not body.title or not body.title.strip():
          raise ValidationError("Title is required")
     if body.amount is None or body.amount <= 0:
          raise ValidationError("Invalid amount")
     return {
          "title": body.title.strip(),
          "amount": body.amount.quantize(Decimal("0.01")),
          "category": body.category or None,
          "notes": body.notes or None,
     }


@router.post("/add", summary="Add expense")
def add_expense(
     body: ExpenseRequest,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     expense = Expense(**_validated_fields(body))
     db.add(expense)
     db.commit()
     return {"success": True, "message": "Expense added", "expenseId": expense.id}


@router.get("/all", response_model=list[ExpenseResponse], summary="List expenses")
def list_expenses(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return db.query(Expense).order_by(Expense.created_at.desc(), Expense.id.desc()).all()


@router.put("/update/{expense_id}", summary="Update expense")
def update_expense(
     expense_id: int,
     body: ExpenseRequest,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     fields = _validated_fields(body)
     expense = db.query(Expense).filter(Expense.id == expense_id).first()
     if not expense:
          raise ExpenseNotFoundError()

     for key, value in fields.items():
          setattr(expense, key, value)
     db.commit()
     return {"success": True, "message": "Expense updated"}


@router.delete("/delete/{expense_id}", summary="Delete expense")
def delete_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     expense = db.query(Expense).filter(Expense.id == expense_id).first()
     if not expense:
          raise ExpenseNotFoundError()

     db.delete(expense)
     db.commit()
     return {"success": True, "message": "Expense deleted"}
