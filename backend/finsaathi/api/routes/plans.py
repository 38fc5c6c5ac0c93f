"""Debt pay-down plan API routes."""
from fastapi import APIRouter, Depends

from finsaathi.api.deps import get_db, get_user_id
from finsaathi.db.queries.debts import list_debts
from finsaathi.models.plan import (
    DebtPlanRequest,
    DebtPlanResponse,
    StoredDebtPlanRequest,
    StrategyComparison,
    StrategyComparisonRequest,
)
from finsaathi.services.debt_plan_service import build_debt_plan, compare_strategies

router = APIRouter(tags=["plans"])


@router.post("/debt-plans/simulate", response_model=DebtPlanResponse)
def simulate_plan(request: DebtPlanRequest):
    """Compute a pay-down plan for inline debts.

    Returns the month-by-month schedule, payoff time, interest paid, and
    interest saved versus paying minimums only.
    """
    return build_debt_plan(
        request.debts, request.monthly_budget, request.strategy, request.include_narrative,
    )


@router.post("/debt-plans/compare", response_model=StrategyComparison)
def compare_plans(request: StrategyComparisonRequest):
    """Run avalanche and snowball side by side and recommend one."""
    return compare_strategies(request.debts, request.monthly_budget)


@router.post("/users/{user_id}/debt-plan", response_model=DebtPlanResponse)
def simulate_stored_plan(
    request: StoredDebtPlanRequest,
    user_id: str = Depends(get_user_id),
    conn=Depends(get_db),
):
    """Compute a pay-down plan over the debts stored for ``user_id``."""
    debts = list_debts(conn, user_id)
    return build_debt_plan(debts, request.monthly_budget, request.strategy, request.include_narrative)
