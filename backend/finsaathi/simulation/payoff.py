"""Debt pay-down simulator.

Projects a month-by-month payment schedule across several debts until every
balance reaches zero. Each month interest accrues first, every active debt
receives its minimum payment, and whatever is left of the budget goes to the
highest-priority debt under the chosen strategy, cascading to the next one
when that debt is cleared. A second, minimum-payments-only run provides the
baseline for the interest-saved figure.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import ValidationError

from finsaathi.models.debt import Debt
from finsaathi.models.plan import DebtPayment, MonthlyPlanEntry, SimulationResult, Strategy
from finsaathi.simulation.errors import BudgetTooLow, InvalidInput, PayoffHorizonExceeded

DEFAULT_HORIZON_MONTHS = 600  # 50 years

# Float dust left after paying a balance down to (almost) nothing.
_ZERO_TOLERANCE = 1e-9


@dataclass
class _DebtState:
    """Run-local balance for one debt; the input Debt is never touched."""
    debt: Debt
    position: int
    balance: float

    @property
    def monthly_rate(self) -> float:
        return self.debt.interest_rate / 12.0 / 100.0


@dataclass
class _RunOutcome:
    months: list[MonthlyPlanEntry] = field(default_factory=list)
    month_count: int = 0
    total_interest: float = 0.0
    total_paid: float = 0.0
    converged: bool = True
    remaining_balance: float = 0.0


PriorityKey = Callable[[_DebtState], tuple]

_PRIORITY_KEYS: dict[Strategy, PriorityKey] = {
    Strategy.avalanche: lambda s: (-s.debt.interest_rate, -s.balance, s.position),
    Strategy.snowball: lambda s: (s.balance, -s.debt.interest_rate, s.position),
}


def _check_amount(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{label} must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidInput(f"{label} must be finite and non-negative, got {value!r}")


def coerce_debts(debts: Iterable[Debt | Mapping[str, Any]]) -> list[Debt]:
    """Validate caller-supplied debts, accepting models or plain records."""
    if debts is None:
        raise InvalidInput("No debts provided")

    coerced: list[Debt] = []
    for i, record in enumerate(debts, start=1):
        if isinstance(record, Debt):
            debt = record
        elif isinstance(record, Mapping):
            try:
                debt = Debt.model_validate(record)
            except ValidationError as e:
                raise InvalidInput(f"Debt #{i} is malformed: {e}") from e
        else:
            raise InvalidInput(f"Debt #{i} is not a debt record: {type(record).__name__}")

        # Debts built with model_construct skip field validation.
        _check_amount(debt.current_balance, f"Balance of '{debt.name}'")
        _check_amount(debt.interest_rate, f"Interest rate of '{debt.name}'")
        _check_amount(debt.minimum_payment, f"Minimum payment of '{debt.name}'")
        coerced.append(debt)
    return coerced


def _coerce_strategy(strategy: Strategy | str) -> Strategy:
    try:
        return Strategy(strategy)
    except ValueError as e:
        raise InvalidInput(
            f"Unknown strategy {strategy!r}; expected one of "
            f"{', '.join(s.value for s in Strategy)}"
        ) from e


def _run(
    debts: list[Debt],
    monthly_budget: float,
    priority_key: Optional[PriorityKey],
    horizon_months: int,
    record: bool = True,
) -> _RunOutcome:
    """Simulate until every balance is zero or the horizon is reached.

    With ``priority_key=None`` every debt gets only its minimum payment
    (the baseline run) and the budget surplus is not spent.
    """
    states = [
        _DebtState(debt=d, position=i, balance=float(d.current_balance))
        for i, d in enumerate(debts)
    ]
    outcome = _RunOutcome()

    while any(s.balance > 0 for s in states):
        if outcome.month_count >= horizon_months:
            outcome.converged = False
            outcome.remaining_balance = sum(s.balance for s in states)
            return outcome
        outcome.month_count += 1
        active = [s for s in states if s.balance > 0]

        # Interest accrues before any payment is applied
        interest: dict[int, float] = {}
        for s in active:
            accrued = s.balance * s.monthly_rate
            s.balance += accrued
            interest[s.position] = accrued

        # Priority is decided on what is owed at payment time
        order = sorted(active, key=priority_key) if priority_key is not None else []

        paid: dict[int, float] = {}
        for s in active:
            amount = min(s.debt.minimum_payment, s.balance)
            s.balance -= amount
            paid[s.position] = amount

        target_debt_id: Optional[str] = None
        pool = monthly_budget - sum(paid.values())
        for s in order:
            if pool <= 0:
                break
            if s.balance <= 0:
                continue
            extra = min(pool, s.balance)
            s.balance -= extra
            paid[s.position] += extra
            pool -= extra
            if target_debt_id is None:
                target_debt_id = s.debt.id

        for s in active:
            if s.balance < _ZERO_TOLERANCE:
                s.balance = 0.0

        month_interest = sum(interest.values())
        month_paid = sum(paid.values())
        outcome.total_interest += month_interest
        outcome.total_paid += month_paid

        if record:
            outcome.months.append(MonthlyPlanEntry(
                month=outcome.month_count,
                payments=[
                    DebtPayment(
                        debt_id=s.debt.id,
                        debt_name=s.debt.name,
                        interest=interest[s.position],
                        payment=paid[s.position],
                        remaining_balance=s.balance,
                    )
                    for s in active
                ],
                target_debt_id=target_debt_id,
                total_paid=month_paid,
                total_interest=month_interest,
                remaining_balance=sum(s.balance for s in states),
            ))

    return outcome


def minimum_payment_total(debts: Iterable[Debt]) -> float:
    """Sum of minimum payments over debts that still carry a balance."""
    return sum(d.minimum_payment for d in debts if not d.is_paid_off)


def simulate(
    debts: Iterable[Debt | Mapping[str, Any]],
    monthly_budget: float,
    strategy: Strategy | str,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> SimulationResult:
    """Compute a full pay-down plan for ``debts`` under ``strategy``.

    Raises:
        InvalidInput: malformed debts or budget, unknown strategy, or no
            debt with a positive balance.
        BudgetTooLow: budget below the sum of active minimum payments.
        PayoffHorizonExceeded: debts not cleared within ``horizon_months``.
    """
    strategy = _coerce_strategy(strategy)
    _check_amount(monthly_budget, "Monthly budget")
    if isinstance(horizon_months, bool) or not isinstance(horizon_months, int) or horizon_months < 1:
        raise InvalidInput(f"Horizon must be a positive number of months, got {horizon_months!r}")

    active = [d for d in coerce_debts(debts) if not d.is_paid_off]
    if not active:
        raise InvalidInput("No debts with an outstanding balance to plan for")

    minimum_required = minimum_payment_total(active)
    if monthly_budget < minimum_required:
        raise BudgetTooLow(monthly_budget, minimum_required)

    chosen = _run(active, monthly_budget, _PRIORITY_KEYS[strategy], horizon_months)
    if not chosen.converged:
        raise PayoffHorizonExceeded(horizon_months, chosen.remaining_balance)

    # The baseline may legitimately never converge (minimums below interest);
    # it is then measured over the horizon only.
    baseline = _run(active, monthly_budget, None, horizon_months, record=False)

    return SimulationResult(
        strategy=strategy,
        monthly_budget=monthly_budget,
        monthly_plan=chosen.months,
        estimated_payoff_time=chosen.month_count,
        total_interest_paid=chosen.total_interest,
        total_paid=chosen.total_paid,
        baseline_interest_paid=baseline.total_interest,
        baseline_payoff_time=baseline.month_count,
        baseline_converged=baseline.converged,
        total_interest_saved=baseline.total_interest - chosen.total_interest,
    )
