#!/usr/bin/env python3
"""Compare avalanche and snowball pay-down plans for a set of debts.

Usage:
    python scripts/payoff_report.py --debts debts.json --budget 25000
    python scripts/payoff_report.py --debts debts.json --budget 25000 --strategy snowball --csv plan.csv

``debts.json`` is a list of debt records, e.g.
    [{"name": "Card", "type": "Credit Card", "current_balance": 50000,
      "interest_rate": 36, "minimum_payment": 2500}]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

BACKEND_DIR = Path(__file__).resolve().parent.parent

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def load_debts(path: str) -> list[dict]:
    with open(path) as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON list of debt records")
    return records


def plan_to_dataframe(result) -> pd.DataFrame:
    """Flatten a SimulationResult into one row per debt per month."""
    rows = []
    for entry in result.monthly_plan:
        for p in entry.payments:
            rows.append({
                "month": entry.month,
                "debt": p.debt_name,
                "interest": round(p.interest, 2),
                "payment": round(p.payment, 2),
                "remaining_balance": round(p.remaining_balance, 2),
                "is_target": p.debt_id == entry.target_debt_id,
                "month_total_paid": round(entry.total_paid, 2),
                "month_remaining_balance": round(entry.remaining_balance, 2),
            })
    columns = [
        "month", "debt", "interest", "payment", "remaining_balance",
        "is_target", "month_total_paid", "month_remaining_balance",
    ]
    return pd.DataFrame(rows, columns=columns)


def comparison_table(comparison) -> pd.DataFrame:
    rows = []
    for result in (comparison.avalanche, comparison.snowball):
        rows.append({
            "strategy": result.strategy.value,
            "months": result.estimated_payoff_time,
            "interest_paid": round(result.total_interest_paid, 2),
            "interest_saved": round(result.total_interest_saved, 2),
            "total_paid": round(result.total_paid, 2),
        })
    return pd.DataFrame(rows).set_index("strategy")


def main():
    parser = argparse.ArgumentParser(description="Debt pay-down strategy comparison")
    parser.add_argument("--debts", required=True, help="Path to a JSON list of debt records")
    parser.add_argument("--budget", type=float, required=True, help="Monthly amount available for debts")
    parser.add_argument("--strategy", choices=["avalanche", "snowball"], default="avalanche",
                        help="Strategy whose schedule is written with --csv (default: avalanche)")
    parser.add_argument("--csv", help="Write the chosen strategy's month-by-month schedule here")
    args = parser.parse_args()

    sys.path.insert(0, str(BACKEND_DIR))
    from finsaathi.services.debt_plan_service import compare_strategies, summarize_debts
    from finsaathi.simulation.errors import DebtPlanError
    from finsaathi.simulation.payoff import coerce_debts

    try:
        debts = coerce_debts(load_debts(args.debts))
        comparison = compare_strategies(debts, args.budget)
    except DebtPlanError as e:
        logger.error("Cannot build a plan: %s", e)
        sys.exit(1)

    summary = summarize_debts(debts)
    logger.info("Debts: %d  |  Balance: ₹%s  |  Minimums: ₹%s/month  |  Weighted APR: %.2f%%",
                summary.debt_count, f"{summary.total_balance:,.2f}",
                f"{summary.total_minimum_payment:,.2f}", summary.weighted_interest_rate)
    logger.info("\n%s\n", comparison_table(comparison).to_string())
    logger.info("Recommended: %s", comparison.recommended.value)

    if args.csv:
        chosen = comparison.avalanche if args.strategy == "avalanche" else comparison.snowball
        df = plan_to_dataframe(chosen)
        df.to_csv(args.csv, index=False)
        logger.info("Wrote %d rows to %s", len(df), args.csv)


if __name__ == "__main__":
    main()
