# routers/users.py
"""
User administration (admin only).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin
from models import User
from schemas.user import UserResponse, UserUpdate
from services.errors import DuplicateEmailError, UserNotFoundError, ValidationError

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/all", response_model=list[UserResponse], summary="List users")
def list_users(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


@router.put("/update/{user_id}", summary="Update user")
def update_user(
     user_id: int,
     body: UserUpdate,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     user = db.query(User).filter(User.id == user_id).first()
     if not user:
          raise UserNotFoundError()

     if body.email is not None:
          email = body.email.strip().lower()
          taken = db.query(User.id).filter(User.email == email, User.id != user_id).first()
          if taken:
               raise DuplicateEmailError("Email already in use.")
          user.email = email

     if body.name is not None:
          user.name = body.name.strip()

     if body.role is not None:
          user.role = body.role.value

     if body.status is not None:
          user.status = body.status.value

     db.commit()
     return {"message": "User updated"}


@router.delete("/delete/{user_id}", summary="Delete user")
def delete_user(
     user_id: int,
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     if user_id == principal.user_id:
          raise ValidationError("You cannot delete your own account.")

     user = db.query(User).filter(User.id == user_id).first()
     if not user:
          raise UserNotFoundError()

     db.delete(user)
     db.commit()
     return {"message": "User deleted"}
