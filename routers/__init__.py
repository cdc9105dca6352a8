# routers/__init__.py
"""
API routers for the boarding house backend.

Import and include these routers in main.py:

     from routers import auth_router, tenants_router, ...

     app.include_router(auth_router)
     app.include_router(tenants_router)
"""
from .auth import router as auth_router
from .admin import router as admin_router
from .client import router as client_router
from .rooms import router as rooms_router
from .tenants import router as tenants_router
from .payments import router as payments_router
from .expenses import router as expenses_router
from .users import router as users_router

__all__ = [
     "auth_router",
     "admin_router",
     "client_router",
     "rooms_router",
     "tenants_router",
     "payments_router",
     "expenses_router",
     "users_router",
]
