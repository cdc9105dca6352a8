# models/expense.py
from sqlalchemy import Column, Integer, String, Numeric, Text
from .base import Base, CreatedAtMixin


class Expense(CreatedAtMixin, Base):
     """Expense model - operating costs logged by the admin."""
     __tablename__ = "expenses"

     id = Column(Integer, primary_key=True, autoincrement=True)
     title = Column(String(255), nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)
     category = Column(String(100), nullable=True)
     notes = Column(Text, nullable=True)

     def __repr__(self):
          return f"<Expense(id={self.id}, title='{self.title}', amount={self.amount})>"
