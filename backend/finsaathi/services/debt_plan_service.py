"""Debt plan orchestration service.

Runs the pay-down simulator with the configured safety horizon, compares
strategies, summarizes a user's debts, and attaches the optional narrative.
"""
from __future__ import annotations

import logging

from finsaathi.config import settings
from finsaathi.models.debt import Debt, DebtSummary
from finsaathi.models.plan import (
    AmortizationPayment,
    DebtPlanResponse,
    SimulationResult,
    Strategy,
    StrategyComparison,
)
from finsaathi.services.narrative import generate_plan_narrative
from finsaathi.simulation.amortization import amortization_schedule, calculate_monthly_payment
from finsaathi.simulation.errors import InvalidInput
from finsaathi.simulation.payoff import minimum_payment_total, simulate

logger = logging.getLogger(__name__)


def run_plan(debts: list[Debt], monthly_budget: float, strategy: Strategy) -> SimulationResult:
    result = simulate(debts, monthly_budget, strategy, horizon_months=settings.PAYOFF_HORIZON_MONTHS)
    logger.info(
        "Computed %s plan for %d debts: %d months, interest %.2f, saved %.2f",
        result.strategy.value, len(debts), result.estimated_payoff_time,
        result.total_interest_paid, result.total_interest_saved,
    )
    return result


def build_debt_plan(
    debts: list[Debt],
    monthly_budget: float,
    strategy: Strategy,
    include_narrative: bool = False,
) -> DebtPlanResponse:
    """Compute a plan and, when asked, describe it in prose."""
    result = run_plan(debts, monthly_budget, strategy)
    narrative = generate_plan_narrative(result, debts) if include_narrative else None
    return DebtPlanResponse(plan=result, narrative=narrative)


def compare_strategies(debts: list[Debt], monthly_budget: float) -> StrategyComparison:
    """Run both strategies on the same input and recommend one.

    Lowest total interest wins, then fewest months; avalanche on a full tie.
    """
    avalanche = run_plan(debts, monthly_budget, Strategy.avalanche)
    snowball = run_plan(debts, monthly_budget, Strategy.snowball)

    ranked = sorted(
        [avalanche, snowball],
        key=lambda r: (round(r.total_interest_paid, 2), r.estimated_payoff_time),
    )
    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        recommended=ranked[0].strategy,
        interest_difference=round(snowball.total_interest_paid - avalanche.total_interest_paid, 2),
        months_difference=snowball.estimated_payoff_time - avalanche.estimated_payoff_time,
    )


def summarize_debts(debts: list[Debt]) -> DebtSummary:
    total_balance = sum(d.current_balance for d in debts)
    weighted_rate = 0.0
    if total_balance > 0:
        weighted_rate = sum(d.interest_rate * d.current_balance for d in debts) / total_balance
    return DebtSummary(
        debt_count=len(debts),
        total_balance=round(total_balance, 2),
        total_minimum_payment=round(minimum_payment_total(debts), 2),
        weighted_interest_rate=round(weighted_rate, 4),
    )


def debt_amortization(
    debt: Debt,
    monthly_payment: float | None = None,
    months: int | None = None,
) -> list[AmortizationPayment]:
    """Schedule for one debt paid at a fixed amount.

    The amount is ``monthly_payment`` when given, the level payment that
    clears the balance in ``months`` when that is given instead, and the
    debt's minimum payment otherwise.
    """
    if monthly_payment is not None and months is not None:
        raise InvalidInput("Give either monthly_payment or months, not both")
    if months is not None:
        payment = calculate_monthly_payment(debt.current_balance, debt.interest_rate, months)
    elif monthly_payment is not None:
        payment = monthly_payment
    else:
        payment = debt.minimum_payment
    return amortization_schedule(
        debt.current_balance,
        debt.interest_rate,
        payment,
        max_months=settings.AMORTIZATION_MAX_MONTHS,
    )
