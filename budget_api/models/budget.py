# budget_api/models/budget.py
from sqlalchemy import Column, String, BigInteger, Numeric
from sqlalchemy.orm import declarative_base

Base = declarative_base()

MONEY_FIELDS = ("income", "bills", "food", "transport", "subscriptions", "miscellaneous")
EXPENSE_FIELDS = MONEY_FIELDS[1:]

MONTH_MAX_LENGTH = 255


class BudgetModel(Base):
    """
    Monthly budget record
    One row per month ("YYYY-MM"): income plus the five expense categories
    """
    __tablename__ = "budgets"

    month = Column(String(MONTH_MAX_LENGTH), primary_key=True)
    income = Column(Numeric(12, 2), default=0, server_default="0")
    bills = Column(Numeric(12, 2), default=0, server_default="0")
    food = Column(Numeric(12, 2), default=0, server_default="0")
    transport = Column(Numeric(12, 2), default=0, server_default="0")
    subscriptions = Column(Numeric(12, 2), default=0, server_default="0")
    miscellaneous = Column(Numeric(12, 2), default=0, server_default="0")
    updated_at = Column(BigInteger, nullable=False)  # ms since epoch
