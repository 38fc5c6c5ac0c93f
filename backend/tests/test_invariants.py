"""Invariant tests — properties that must hold regardless of parameters.

Covers money conservation, schedule shape, balance monotonicity, strategy
targeting, interest optimality of avalanche, and reproducibility.
"""
import pytest

from finsaathi.models.debt import Debt
from finsaathi.models.plan import Strategy
from finsaathi.simulation.payoff import simulate


def _debt(debt_id: str, balance: float, rate: float, minimum: float) -> Debt:
    return Debt(
        id=debt_id,
        name=f"Debt {debt_id}",
        current_balance=balance,
        interest_rate=rate,
        minimum_payment=minimum,
    )


PORTFOLIOS = {
    "two_cards": (
        [_debt("A", 5_000, 24, 200), _debt("B", 2_000, 12, 100)],
        500.0,
    ),
    "household": (
        [
            _debt("card", 85_000, 36, 4_250),
            _debt("personal", 250_000, 14.5, 8_600),
            _debt("auto", 420_000, 9.2, 11_800),
            _debt("student", 150_000, 8.5, 3_100),
        ],
        40_000.0,
    ),
    "minimums_only": (
        [_debt("x", 30_000, 18, 1_500), _debt("y", 10_000, 21, 800), _debt("z", 60_000, 11, 2_000)],
        4_300.0,
    ),
    "zero_rate": (
        [_debt("p", 1_000, 0, 100), _debt("q", 2_500, 0, 50)],
        400.0,
    ),
}


def _cases():
    return [
        pytest.param(debts, budget, strategy, id=f"{name}-{strategy.value}")
        for name, (debts, budget) in PORTFOLIOS.items()
        for strategy in Strategy
    ]


# ---------------------------------------------------------------------------
# Accounting identities
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_principal_plus_interest_equals_payments(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    principal = sum(d.current_balance for d in debts)
    interest = sum(entry.total_interest for entry in result.monthly_plan)
    payments = sum(p.payment for entry in result.monthly_plan for p in entry.payments)
    assert principal + interest == pytest.approx(payments, rel=1e-9, abs=1e-6)
    assert interest == pytest.approx(result.total_interest_paid)
    assert payments == pytest.approx(result.total_paid)


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_month_totals_match_debt_rows(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    for entry in result.monthly_plan:
        assert entry.total_paid == pytest.approx(sum(p.payment for p in entry.payments))
        assert entry.total_interest == pytest.approx(sum(p.interest for p in entry.payments))
        assert entry.total_paid <= budget + 1e-6


# ---------------------------------------------------------------------------
# Schedule shape
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_payoff_time_equals_plan_length(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    assert result.estimated_payoff_time == len(result.monthly_plan)
    assert [e.month for e in result.monthly_plan] == list(range(1, len(result.monthly_plan) + 1))
    assert result.monthly_plan[-1].remaining_balance == 0.0


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_remaining_balance_never_increases(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    plan = result.monthly_plan
    for i in range(1, len(plan)):
        assert plan[i].remaining_balance <= plan[i - 1].remaining_balance, (
            f"Balance increased at month {plan[i].month}: "
            f"{plan[i - 1].remaining_balance} -> {plan[i].remaining_balance}"
        )


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_balances_never_negative(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    for entry in result.monthly_plan:
        for p in entry.payments:
            assert p.remaining_balance >= 0.0
            assert p.payment >= 0.0


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_cleared_debts_leave_the_plan(debts, budget, strategy):
    result = simulate(debts, budget, strategy)
    cleared: set[str] = set()
    for entry in result.monthly_plan:
        ids = {p.debt_id for p in entry.payments}
        assert not ids & cleared
        cleared |= {p.debt_id for p in entry.payments if p.remaining_balance == 0.0}
    assert cleared == {d.id for d in debts}


# ---------------------------------------------------------------------------
# Strategy targeting
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("name", list(PORTFOLIOS))
def test_avalanche_target_has_highest_open_rate(name):
    debts, budget = PORTFOLIOS[name]
    rates = {d.id: d.interest_rate for d in debts}
    result = simulate(debts, budget, Strategy.avalanche)
    for entry in result.monthly_plan:
        if entry.target_debt_id is None:
            continue
        target_rate = rates[entry.target_debt_id]
        for p in entry.payments:
            # A higher-rate debt may only be skipped if it was cleared this month
            if rates[p.debt_id] > target_rate:
                assert p.remaining_balance == 0.0


@pytest.mark.parametrize("name", list(PORTFOLIOS))
def test_snowball_target_has_lowest_open_balance(name):
    debts, budget = PORTFOLIOS[name]
    result = simulate(debts, budget, Strategy.snowball)
    for entry in result.monthly_plan:
        if entry.target_debt_id is None:
            continue
        owed = {p.debt_id: p.payment + p.remaining_balance for p in entry.payments}
        target_owed = owed[entry.target_debt_id]
        for p in entry.payments:
            if owed[p.debt_id] < target_owed - 1e-6:
                assert p.remaining_balance == 0.0


@pytest.mark.parametrize("name", list(PORTFOLIOS))
def test_avalanche_saves_interest_with_surplus_budget(name):
    debts, budget = PORTFOLIOS[name]
    result = simulate(debts, budget, Strategy.avalanche)
    assert result.total_interest_saved >= -1e-9


def test_minimum_only_budget_still_snowballs_freed_minimums():
    debts, budget = PORTFOLIOS["minimums_only"]
    assert budget == sum(d.minimum_payment for d in debts)
    result = simulate(debts, budget, Strategy.avalanche)
    assert result.monthly_plan[0].target_debt_id is None
    assert result.estimated_payoff_time < result.baseline_payoff_time
    assert result.total_interest_saved > 0


def test_baseline_that_never_converges_is_measured_over_horizon():
    # Minimum of 100 never covers 200/month interest, but the budget does
    debts = [_debt("trap", 10_000, 24, 100)]
    result = simulate(debts, 2_000.0, Strategy.avalanche, horizon_months=120)
    assert result.baseline_converged is False
    assert result.baseline_payoff_time == 120
    assert result.total_interest_saved > 0


# ---------------------------------------------------------------------------
# Reproducibility
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("debts,budget,strategy", _cases())
def test_simulation_is_deterministic(debts, budget, strategy):
    assert simulate(debts, budget, strategy) == simulate(debts, budget, strategy)


def test_debt_order_only_matters_for_exact_ties():
    debts, budget = PORTFOLIOS["household"]
    forward = simulate(debts, budget, Strategy.avalanche)
    backward = simulate(list(reversed(debts)), budget, Strategy.avalanche)
    assert forward.estimated_payoff_time == backward.estimated_payoff_time
    assert forward.total_interest_paid == pytest.approx(backward.total_interest_paid)
