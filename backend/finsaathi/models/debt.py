from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DebtType(str, Enum):
    """Debt category. Display only; the simulator ignores it."""
    credit_card = "Credit Card"
    personal_loan = "Personal Loan"
    auto_loan = "Auto Loan"
    home_loan = "Home Loan"
    student_loan = "Student Loan"
    other = "Other"


def new_debt_id() -> str:
    return uuid4().hex


class Debt(BaseModel):
    """A liability owned by a user.

    interest_rate is an annual percentage (14.5 == 14.5% APR).
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_debt_id)
    name: str = Field(min_length=1)
    type: DebtType = DebtType.other
    current_balance: float = Field(ge=0.0, allow_inf_nan=False)
    interest_rate: float = Field(ge=0.0, allow_inf_nan=False)
    minimum_payment: float = Field(ge=0.0, allow_inf_nan=False)
    total_amount: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    user_id: Optional[str] = None

    @computed_field
    @property
    def is_paid_off(self) -> bool:
        return self.current_balance <= 0

    @computed_field
    @property
    def paid_off_fraction(self) -> Optional[float]:
        """Share of the original principal already repaid, when known."""
        if not self.total_amount:
            return None
        paid = self.total_amount - self.current_balance
        return min(max(paid / self.total_amount, 0.0), 1.0)


class DebtCreate(BaseModel):
    name: str = Field(min_length=1)
    type: DebtType = DebtType.other
    current_balance: float = Field(ge=0.0, allow_inf_nan=False)
    interest_rate: float = Field(ge=0.0, allow_inf_nan=False)
    minimum_payment: float = Field(ge=0.0, allow_inf_nan=False)
    total_amount: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)


class DebtUpdate(BaseModel):
    """Partial update; unset fields are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[DebtType] = None
    current_balance: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    interest_rate: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    minimum_payment: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    total_amount: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)


class DebtSummary(BaseModel):
    """Aggregate figures shown above a user's debt list."""
    debt_count: int
    total_balance: float
    total_minimum_payment: float
    weighted_interest_rate: float
