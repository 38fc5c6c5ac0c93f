"""Single-debt amortization — fixed monthly payment schedules.

Rates are annual percentages (12.0 == 12% APR), matching Debt.interest_rate.
"""
from __future__ import annotations

from finsaathi.models.plan import AmortizationPayment

DEFAULT_MAX_MONTHS = 480  # 40 years
# Rows are shown in cents; a shortfall under half a cent settles this month.
_CENT_TOLERANCE = 0.005


def calculate_monthly_payment(balance: float, annual_rate: float, months: int) -> float:
    """Standard PMT formula for a fixed-rate amortizing debt.

    PMT = P * r / (1 - (1+r)^-n)
    """
    if months <= 0 or balance <= 0:
        return 0.0
    r = annual_rate / 12.0 / 100.0
    if r <= 0:
        return balance / months
    return balance * r / (1.0 - (1.0 + r) ** -months)


def amortization_schedule(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> list[AmortizationPayment]:
    """Split each fixed payment into interest and principal until paid off.

    Returns an empty schedule when the inputs cannot amortize: no principal,
    a negative rate, no payment, or a payment that does not even cover the
    first month's interest.
    """
    if principal <= 0 or annual_rate < 0 or monthly_payment <= 0:
        return []

    r = annual_rate / 12.0 / 100.0
    if monthly_payment <= principal * r:
        return []

    schedule: list[AmortizationPayment] = []
    balance = principal
    month = 0

    while balance > 0 and month < max_months:
        month += 1
        interest = balance * r
        owed = balance + interest

        if owed <= monthly_payment + _CENT_TOLERANCE:
            # Final payment covers exactly what is left
            principal_paid = balance
            payment = owed
        else:
            principal_paid = monthly_payment - interest
            payment = monthly_payment

        balance = max(balance - principal_paid, 0.0)

        schedule.append(AmortizationPayment(
            month=month,
            principal=round(principal_paid, 2),
            interest=round(interest, 2),
            total_payment=round(payment, 2),
            remaining_balance=round(balance, 2),
        ))

    return schedule
