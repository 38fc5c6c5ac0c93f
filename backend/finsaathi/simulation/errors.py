"""Errors raised by the debt pay-down simulator.

All of them are deterministic for a given input, so none is retryable
without changing the input.
"""
from __future__ import annotations


class DebtPlanError(Exception):
    """Base class for simulator failures."""


class InvalidInput(DebtPlanError, ValueError):
    """Malformed or out-of-range input data."""


class BudgetTooLow(DebtPlanError):
    """Monthly budget does not cover the minimum payments."""

    def __init__(self, monthly_budget: float, minimum_required: float):
        self.monthly_budget = monthly_budget
        self.minimum_required = minimum_required
        super().__init__(
            f"Monthly budget ({monthly_budget:,.2f}) is less than the total of "
            f"minimum payments; increase it to at least {minimum_required:,.2f}"
        )


class PayoffHorizonExceeded(DebtPlanError):
    """Debts are not paid off within the safety horizon."""

    def __init__(self, horizon_months: int, remaining_balance: float):
        self.horizon_months = horizon_months
        self.remaining_balance = remaining_balance
        super().__init__(
            f"Debts are not paid off within {horizon_months} months "
            f"({remaining_balance:,.2f} still outstanding); payments do not "
            f"keep up with interest"
        )
