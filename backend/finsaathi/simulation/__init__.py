"""Debt simulation — multi-debt pay-down plans and single-debt amortization."""
from finsaathi.simulation.errors import (
    DebtPlanError,
    InvalidInput,
    BudgetTooLow,
    PayoffHorizonExceeded,
)
from finsaathi.simulation.payoff import simulate, minimum_payment_total, DEFAULT_HORIZON_MONTHS
from finsaathi.simulation.amortization import amortization_schedule, calculate_monthly_payment

__all__ = [
    "DebtPlanError",
    "InvalidInput",
    "BudgetTooLow",
    "PayoffHorizonExceeded",
    "simulate",
    "minimum_payment_total",
    "DEFAULT_HORIZON_MONTHS",
    "amortization_schedule",
    "calculate_monthly_payment",
]
