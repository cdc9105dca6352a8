# routers/auth.py
"""
Registration and login.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import create_access_token, hash_password, verify_password
from models import User, UserRole, UserStatus
from schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserSummary
from services.errors import DuplicateEmailError, ForbiddenError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", summary="Register a user")
def register_user(body: RegisterRequest, db: Session = Depends(get_session)):
     """
     Create a user account. Role defaults to client, status to active.
     A second registration with the same email fails.
     """
     email = body.email.strip().lower()
     if not body.name.strip() or not email or not body.password:
          raise ValidationError("Name, email, and password are required.")

     if db.query(User.id).filter(User.email == email).first():
          raise DuplicateEmailError()

     user = User(
          name=body.name.strip(),
          email=email,
          password=hash_password(body.password),
          role=(body.role or UserRole.CLIENT).value,
          status=UserStatus.ACTIVE.value,
     )
     db.add(user)
     db.commit()
     logger.info("User %s registered as %s", user.email, user.role)
     return {"message": "Registration successful!"}


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login_user(body: LoginRequest, db: Session = Depends(get_session)):
     user = db.query(User).filter(User.email == body.email.strip().lower()).first()
     if not user or not verify_password(body.password, user.password):
          raise ValidationError("Invalid email or password.")

     if not user.is_active:
          raise ForbiddenError("Account is inactive.")

     token = create_access_token(user.id, user.role)
     return LoginResponse(token=token, user=UserSummary.model_validate(user))
