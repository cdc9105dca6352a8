# routers/client.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_tenant
from models import User

router = APIRouter(prefix="/api/client", tags=["client"])


@router.get("/dashboard", summary="Signed-in client's name and email")
def get_dashboard(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_tenant),
):
     user = db.query(User).filter(User.id == principal.user_id).first()
     if not user:
          return {"tenant": None}
     return {"tenant": {"tenant_name": user.name, "tenant_email": user.email}}
