from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from budget_api.models.budget import MONTH_MAX_LENGTH


class BudgetCreate(BaseModel):
    """Flat body for POST /budgets"""
    month: str = Field(min_length=1, max_length=MONTH_MAX_LENGTH)
    income: Decimal = Decimal(0)
    bills: Decimal = Decimal(0)
    food: Decimal = Decimal(0)
    transport: Decimal = Decimal(0)
    subscriptions: Decimal = Decimal(0)
    miscellaneous: Decimal = Decimal(0)


class BudgetUpdate(BaseModel):
    """
    Flat partial body for PUT /budgets/{month}
    Only keys present in the body are applied (see model_fields_set)
    """
    income: Optional[Decimal] = None
    bills: Optional[Decimal] = None
    food: Optional[Decimal] = None
    transport: Optional[Decimal] = None
    subscriptions: Optional[Decimal] = None
    miscellaneous: Optional[Decimal] = None


class ExpensesBreakdown(BaseModel):
    bills: Decimal = Decimal(0)
    food: Decimal = Decimal(0)
    transport: Decimal = Decimal(0)
    subscriptions: Decimal = Decimal(0)
    miscellaneous: Decimal = Decimal(0)


class BudgetSync(BaseModel):
    """Nested body for POST /sync"""
    month: str = Field(min_length=1, max_length=MONTH_MAX_LENGTH)
    income: Decimal = Decimal(0)
    expenses: ExpensesBreakdown = Field(default_factory=ExpensesBreakdown)


class BudgetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    income: Optional[float] = None
    bills: Optional[float] = None
    food: Optional[float] = None
    transport: Optional[float] = None
    subscriptions: Optional[float] = None
    miscellaneous: Optional[float] = None
    updated_at: int = Field(serialization_alias="updatedAt")


class SyncResponse(BaseModel):
    success: bool
    timestamp: int


class MessageResponse(BaseModel):
    message: str
