# routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Principal, require_admin
from services.report_service import dashboard_stats

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", summary="Dashboard counts")
def get_stats(
     db: Session = Depends(get_session),
     principal: Principal = Depends(require_admin),
):
     return dashboard_stats(db)
