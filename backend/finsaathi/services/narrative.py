"""Plan narrative — optional prose description of a computed debt plan.

The figures always come from the simulator. The language model only turns
an already verified plan into a title and a short, encouraging summary; a
missing API key or a failed call simply means no narrative.
"""
from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types
from pydantic import ValidationError

from finsaathi.config import settings
from finsaathi.models.debt import Debt
from finsaathi.models.plan import PlanNarrative, SimulationResult, Strategy

logger = logging.getLogger(__name__)

_STRATEGY_DESCRIPTIONS = {
    Strategy.avalanche: "Avalanche: extra money goes to the highest interest rate first",
    Strategy.snowball: "Snowball: extra money goes to the smallest balance first",
}

_INSTRUCTIONS = """You are an expert debt counselor writing for a personal finance app.
All currency is Indian Rupees (₹). The plan below has already been calculated;
do not recompute, change or invent any number. Write a short title for the plan
and a summary of 3-5 sentences explaining the strategy, the order in which the
debts get cleared and the expected outcome. Keep it clear and encouraging."""


def build_prompt(result: SimulationResult, debts: list[Debt]) -> str:
    """Render the plan facts the model is allowed to talk about."""
    lines = [_INSTRUCTIONS, "", "Debts:"]
    for d in debts:
        lines.append(
            f"- {d.name} ({d.type.value}): balance ₹{d.current_balance:,.2f} "
            f"@ {d.interest_rate:g}% APR, minimum ₹{d.minimum_payment:,.2f}"
        )

    payoff_order = _payoff_order(result)
    lines += [
        "",
        f"Strategy: {_STRATEGY_DESCRIPTIONS[result.strategy]}",
        f"Monthly budget: ₹{result.monthly_budget:,.2f}",
        f"Months to debt-free: {result.estimated_payoff_time}",
        f"Total interest paid: ₹{result.total_interest_paid:,.2f}",
        f"Interest saved versus minimum payments only: ₹{result.total_interest_saved:,.2f}",
        "Payoff order: " + ", ".join(f"{name} (month {month})" for name, month in payoff_order),
    ]
    return "\n".join(lines)


def _payoff_order(result: SimulationResult) -> list[tuple[str, int]]:
    order: list[tuple[str, int]] = []
    for entry in result.monthly_plan:
        for p in entry.payments:
            if p.remaining_balance == 0:
                order.append((p.debt_name, entry.month))
    return order


def generate_plan_narrative(
    result: SimulationResult,
    debts: list[Debt],
    client: Any = None,
) -> PlanNarrative | None:
    """Ask Gemini to describe ``result``; ``None`` when unavailable."""
    if client is None:
        if not settings.GEMINI_API_KEY:
            logger.info("GEMINI_API_KEY not configured, skipping plan narrative")
            return None
        client = genai.Client(api_key=settings.GEMINI_API_KEY)

    try:
        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=build_prompt(result, debts),
            config=types.GenerateContentConfig(
                temperature=0.2,
                response_mime_type="application/json",
                response_schema=PlanNarrative,
            ),
        )
        return PlanNarrative.model_validate_json(response.text)
    except ValidationError as e:
        logger.warning("Plan narrative response did not match schema: %s", e)
    except Exception as e:
        logger.warning("Plan narrative generation failed: %s", e)
    return None
