"""Debt records API: CRUD, summary and per-debt amortization schedule."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from finsaathi.api.deps import get_db, get_user_id
from finsaathi.db.queries.debts import create_debt, delete_debt, get_debt, list_debts, update_debt
from finsaathi.models.debt import Debt, DebtCreate, DebtSummary, DebtUpdate
from finsaathi.models.plan import AmortizationPayment
from finsaathi.services.debt_plan_service import debt_amortization, summarize_debts

router = APIRouter(tags=["debts"])


@router.get("/users/{user_id}/debts", response_model=list[Debt])
def get_debts(user_id: str = Depends(get_user_id), conn=Depends(get_db)):
    return list_debts(conn, user_id)


@router.post("/users/{user_id}/debts", response_model=Debt, status_code=201)
def add_debt(payload: DebtCreate, user_id: str = Depends(get_user_id), conn=Depends(get_db)):
    return create_debt(conn, user_id, payload)


# Declared before /debts/{debt_id} so "summary" is not taken for an id.
@router.get("/users/{user_id}/debts/summary", response_model=DebtSummary)
def get_debt_summary(user_id: str = Depends(get_user_id), conn=Depends(get_db)):
    return summarize_debts(list_debts(conn, user_id))


@router.get("/users/{user_id}/debts/{debt_id}", response_model=Debt)
def get_single_debt(debt_id: str, user_id: str = Depends(get_user_id), conn=Depends(get_db)):
    return get_debt(conn, user_id, debt_id)


@router.patch("/users/{user_id}/debts/{debt_id}", response_model=Debt)
def edit_debt(
    debt_id: str,
    payload: DebtUpdate,
    user_id: str = Depends(get_user_id),
    conn=Depends(get_db),
):
    return update_debt(conn, user_id, debt_id, payload)


@router.delete("/users/{user_id}/debts/{debt_id}", status_code=204)
def remove_debt(debt_id: str, user_id: str = Depends(get_user_id), conn=Depends(get_db)):
    delete_debt(conn, user_id, debt_id)
    return Response(status_code=204)


@router.get(
    "/users/{user_id}/debts/{debt_id}/amortization",
    response_model=list[AmortizationPayment],
)
def get_amortization(
    debt_id: str,
    monthly_payment: Optional[float] = Query(default=None, gt=0),
    months: Optional[int] = Query(default=None, gt=0, le=480),
    user_id: str = Depends(get_user_id),
    conn=Depends(get_db),
):
    """Payment schedule for one debt, at its minimum payment unless overridden.

    ``months`` asks for the level payment that clears the debt in that many
    months. Empty when the payment never catches up with the interest.
    """
    debt = get_debt(conn, user_id, debt_id)
    return debt_amortization(debt, monthly_payment, months)
