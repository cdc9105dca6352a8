# config.py
import os
import logging
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
     return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
     # Database (MS SQL Server via pymssql unless DATABASE_URL is given)
     DB_SERVER = os.getenv("DB_SERVER", "localhost")
     DB_PORT = os.getenv("DB_PORT", "1433")
     DB_USER = os.getenv("DB_USER", "")
     DB_PASS = os.getenv("DB_PASS", "")
     DB_NAME = os.getenv("DB_NAME", "boarding_house")
     SQL_ECHO = _flag("SQL_ECHO")
     AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES")

     # Auth
     JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
     JWT_ALGORITHM = "HS256"
     JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))

     # Bootstrap admin, seeded on startup when both are set
     ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
     ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
     ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

     # HTTP
     PORT = int(os.getenv("PORT", "5000"))
     CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
     UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
     LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

     # Business policy
     ROOM_GENDER_POLICY = _flag("ROOM_GENDER_POLICY")

     # Mail (Brevo transactional API)
     BREVO_API_KEY = os.getenv("BREVO_API_KEY")
     MAIL_SENDER = os.getenv("MAIL_SENDER", "noreply@boardinghouse.local")

     @property
     def DATABASE_URL(self) -> str:
          url = os.getenv("DATABASE_URL")
          if url:
               return url
          safe_user = quote_plus(self.DB_USER or "")
          safe_pass = quote_plus(self.DB_PASS or "")
          return f"mssql+pymssql://{safe_user}:{safe_pass}@{self.DB_SERVER}:{self.DB_PORT}/{self.DB_NAME}"


settings = Settings()

if settings.JWT_SECRET == "change-me":
     logging.getLogger(__name__).warning("JWT_SECRET is not set, using an insecure default")
