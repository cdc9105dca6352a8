# models/base.py
from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
     """Declarative base shared by all boarding house tables."""


class CreatedAtMixin:
     """Row creation time, set by the database."""
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
