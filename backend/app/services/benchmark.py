"""
Compare the adaptive solver with a plain two-pointer greedy on random households.

Run with: python -m app.services.benchmark
"""
import logging
import random
import time
from typing import Callable, Optional

from app.config import LOG_LEVEL
from app.schemas import Balance, BenchmarkRow, MemberProfile, SettlementItem
from app.services.money import SETTLE_EPSILON, is_dust, make_settlement, round_cents
from app.services.settlement_calculator import plan_settlements

logger = logging.getLogger(__name__)

HOUSEHOLD_SIZES = (3, 6, 10, 15, 20)


def baseline_greedy(balances: list[Balance]) -> list[SettlementItem]:
    """Largest debtor pays largest creditor until one side runs out."""
    debtors = []  # (balance, amount_owed)
    creditors = []
    for b in balances:
        if is_dust(b.amount):
            continue
        if b.amount < 0:
            debtors.append((b, -b.amount))
        else:
            creditors.append((b, b.amount))
    debtors.sort(key=lambda x: -x[1])
    creditors.sort(key=lambda x: -x[1])

    out: list[SettlementItem] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        d, d_amount = debtors[i]
        c, c_amount = creditors[j]
        transfer = min(d_amount, c_amount)
        out.append(make_settlement(d, c, transfer))
        debtors[i] = (d, d_amount - transfer)
        creditors[j] = (c, c_amount - transfer)
        if debtors[i][1] < SETTLE_EPSILON:
            i += 1
        if creditors[j][1] < SETTLE_EPSILON:
            j += 1
    return out


def make_household(size: int, rng: Optional[random.Random] = None) -> list[Balance]:
    """
    About half debtors and half creditors with amounts between 10 and 100; the
    last member absorbs the difference so the household sums to zero.
    """
    rng = rng or random.Random()
    balances = []
    total = 0.0
    for i in range(size - 1):
        amount = round_cents(10 + rng.random() * 90)
        if i < size // 2:
            amount = -amount
        total += amount
        balances.append(_member(i, amount))
    balances.append(_member(size - 1, round_cents(-total)))
    return balances


def _member(i: int, amount: float) -> Balance:
    return Balance(
        user_id=f"user{i}",
        amount=amount,
        profile=MemberProfile(user_id=f"user{i}", name=f"User{i}", avatar_url=f"avatar-User{i}"),
    )


def time_solver(fn: Callable[[], object], iterations: int) -> float:
    """Average wall time of fn() in milliseconds."""
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    return (time.perf_counter() - start) * 1000 / iterations


def run_benchmark(
    sizes: tuple[int, ...] = HOUSEHOLD_SIZES,
    iterations: int = 100,
    seed: Optional[int] = None,
) -> list[BenchmarkRow]:
    rng = random.Random(seed)
    rows = []
    for size in sizes:
        balances = make_household(size, rng)
        # warm up
        plan_settlements(balances)
        baseline_greedy(balances)

        adaptive_ms = time_solver(lambda: plan_settlements(balances), iterations)
        baseline_ms = time_solver(lambda: baseline_greedy(balances), iterations)
        strategy, adaptive = plan_settlements(balances)
        baseline = baseline_greedy(balances)

        row = BenchmarkRow(
            users=size,
            strategy=strategy.value if strategy else None,
            adaptive_ms=round(adaptive_ms, 4),
            baseline_ms=round(baseline_ms, 4),
            adaptive_transactions=len(adaptive),
            baseline_transactions=len(baseline),
        )
        logger.info(
            "%d users (%s): %.3fms vs %.3fms baseline, %d vs %d transactions",
            row.users, row.strategy, row.adaptive_ms, row.baseline_ms,
            row.adaptive_transactions, row.baseline_transactions,
        )
        rows.append(row)
    return rows


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    run_benchmark()
