from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from finsaathi.models.debt import Debt


class Strategy(str, Enum):
    """Which debt receives the surplus budget each month."""
    avalanche = "avalanche"  # highest interest rate first
    snowball = "snowball"    # smallest balance first


class DebtPayment(BaseModel):
    """One debt's activity in a single month."""
    debt_id: str
    debt_name: str
    interest: float
    payment: float
    remaining_balance: float


class MonthlyPlanEntry(BaseModel):
    """Payments for one month of a pay-down plan."""
    month: int
    payments: list[DebtPayment]
    target_debt_id: Optional[str] = None
    total_paid: float
    total_interest: float
    remaining_balance: float


class SimulationResult(BaseModel):
    """Month-by-month schedule plus summary metrics for one strategy."""
    strategy: Strategy
    monthly_budget: float
    monthly_plan: list[MonthlyPlanEntry]
    estimated_payoff_time: int
    total_interest_paid: float
    total_paid: float
    baseline_interest_paid: float
    baseline_payoff_time: int
    baseline_converged: bool = True
    total_interest_saved: float


class PlanNarrative(BaseModel):
    """Human-readable description of an already computed plan."""
    title: str
    summary: str


class DebtPlanRequest(BaseModel):
    """Request body for an inline debt plan; no stored debts required."""
    debts: list[Debt]
    monthly_budget: float = Field(ge=0.0, allow_inf_nan=False)
    strategy: Strategy = Strategy.avalanche
    include_narrative: bool = False


class StoredDebtPlanRequest(BaseModel):
    """Request body for a plan over a user's stored debts."""
    monthly_budget: float = Field(ge=0.0, allow_inf_nan=False)
    strategy: Strategy = Strategy.avalanche
    include_narrative: bool = False


class StrategyComparisonRequest(BaseModel):
    debts: list[Debt]
    monthly_budget: float = Field(ge=0.0, allow_inf_nan=False)


class DebtPlanResponse(BaseModel):
    plan: SimulationResult
    narrative: Optional[PlanNarrative] = None


class StrategyComparison(BaseModel):
    avalanche: SimulationResult
    snowball: SimulationResult
    recommended: Strategy
    interest_difference: float
    months_difference: int


class AmortizationPayment(BaseModel):
    """One row of a single-debt amortization schedule."""
    month: int
    principal: float
    interest: float
    total_payment: float
    remaining_balance: float
