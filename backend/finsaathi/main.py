import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finsaathi.config import settings
from finsaathi.db.connection import db_pool
from finsaathi.simulation.errors import BudgetTooLow, InvalidInput, PayoffHorizonExceeded
from finsaathi.api.routes import health, debts, plans

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize DB pool
    db_pool.initialize()
    yield
    # Shutdown: close DB pool
    db_pool.close()


app = FastAPI(title="FinSaathi Debt Planner", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=422, content={"error": "invalid_input", "detail": str(exc)})


@app.exception_handler(BudgetTooLow)
async def budget_too_low_handler(request: Request, exc: BudgetTooLow):
    return JSONResponse(status_code=422, content={
        "error": "budget_too_low",
        "detail": str(exc),
        "monthly_budget": exc.monthly_budget,
        "minimum_required": round(exc.minimum_required, 2),
    })


@app.exception_handler(PayoffHorizonExceeded)
async def horizon_exceeded_handler(request: Request, exc: PayoffHorizonExceeded):
    logger.warning("Debt plan did not converge: %s", exc)
    return JSONResponse(status_code=422, content={
        "error": "payoff_horizon_exceeded",
        "detail": str(exc),
        "horizon_months": exc.horizon_months,
        "remaining_balance": round(exc.remaining_balance, 2),
    })


app.include_router(health.router, prefix="/api")
app.include_router(debts.router, prefix="/api")
app.include_router(plans.router, prefix="/api")
