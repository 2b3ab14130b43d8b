"""Settlements: work out who pays whom, check a plan, compare and benchmark solvers."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.schemas import (
    BenchmarkRow, ComparisonResponse, SettleRequest, SettlementSummary, VerifyRequest, VerifyResponse,
)
from app.services.benchmark import baseline_greedy, run_benchmark
from app.services.money import apply_settlements, is_dust, round_cents
from app.services.settlement_calculator import InvalidBalancesError, plan_settlements, validate_balances

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settlements", tags=["settlements"])


def _summary(data: SettleRequest) -> SettlementSummary:
    try:
        strategy, settlements = plan_settlements(data.balances)
    except InvalidBalancesError as e:
        logger.warning("Rejected balances: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return SettlementSummary(
        strategy=strategy.value if strategy else None,
        participant_count=sum(1 for b in data.balances if not is_dust(b.amount)),
        transaction_count=len(settlements),
        settlements=settlements,
    )


@router.post("/compute", response_model=SettlementSummary)
def compute(data: SettleRequest):
    return _summary(data)


@router.post("/verify", response_model=VerifyResponse)
def verify(data: VerifyRequest):
    try:
        validate_balances(data.balances)
    except InvalidBalancesError as e:
        logger.warning("Rejected balances: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    if any(s.amount <= 0 for s in data.settlements):
        raise HTTPException(status_code=400, detail="Settlement amounts must be positive")
    if any(s.from_user_id == s.to_user_id for s in data.settlements):
        raise HTTPException(status_code=400, detail="A member cannot pay themselves")
    known = {b.user_id for b in data.balances}
    if any(s.from_user_id not in known or s.to_user_id not in known for s in data.settlements):
        raise HTTPException(status_code=400, detail="Payer and recipient must both have a balance")

    residual = apply_settlements(data.balances, data.settlements)
    for b in residual:
        b.amount = round_cents(b.amount)
    return VerifyResponse(
        settled=all(is_dust(b.amount) for b in residual),
        balances=residual,
    )


@router.post("/compare", response_model=ComparisonResponse)
def compare(data: SettleRequest):
    adaptive = _summary(data)
    baseline = baseline_greedy(data.balances)
    return ComparisonResponse(
        adaptive=adaptive,
        baseline=baseline,
        saved_transactions=len(baseline) - adaptive.transaction_count,
    )


@router.get("/benchmark", response_model=list[BenchmarkRow])
def benchmark(
    iterations: int = Query(20, ge=1, le=1000),
    seed: Optional[int] = Query(None),
):
    return run_benchmark(iterations=iterations, seed=seed)
