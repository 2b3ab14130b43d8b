"""
Settlement strategies. Each takes the active (non-dust) balances and returns the
payments that zero them; none of them mutates its input.

Working balances are kept in whole cents: every update is rounded, and "zero"
or "matches" means equal once rounded.
"""
import math
from enum import Enum

from app.config import CLUSTER_COUNT
from app.schemas import Balance, SettlementItem
from app.services.money import (
    apply_settlements,
    copy_balances,
    is_zero_cents,
    make_settlement,
    round_cents,
)


class Strategy(str, Enum):
    EXACT_GREEDY = "exact_greedy"
    CLUSTERING = "clustering"
    HEURISTIC = "heuristic"


def _pay(debtor: Balance, creditor: Balance, amount: float) -> SettlementItem:
    debtor.amount = round_cents(debtor.amount + amount)
    creditor.amount = round_cents(creditor.amount - amount)
    return make_settlement(debtor, creditor, amount)


# ----- Exact/greedy (small groups) -----
def exact_greedy(balances: list[Balance]) -> list[SettlementItem]:
    """
    Pair debts that cancel exactly; if that settles everyone we are done.
    Otherwise start over and repeatedly pay the largest creditor from the largest
    debtor. Best effort: common cases come out minimal, but nothing proves it.
    """
    working = copy_balances(balances, rounded=True)

    direct = _direct_matches(working)
    if direct:
        remaining = apply_settlements(working, direct)
        if all(is_zero_cents(b.amount) for b in remaining):
            return direct

    return _max_pairing(working)


def _direct_matches(balances: list[Balance]) -> list[SettlementItem]:
    out: list[SettlementItem] = []
    used: set[str] = set()
    ordered = sorted(balances, key=lambda b: abs(b.amount), reverse=True)

    for debtor in ordered:
        if debtor.user_id in used or debtor.amount >= 0:
            continue
        for creditor in ordered:
            if creditor.user_id in used or creditor.user_id == debtor.user_id or creditor.amount <= 0:
                continue
            if is_zero_cents(creditor.amount + debtor.amount):
                out.append(make_settlement(debtor, creditor, creditor.amount))
                used.add(debtor.user_id)
                used.add(creditor.user_id)
                break
    return out


def _max_pairing(balances: list[Balance]) -> list[SettlementItem]:
    # Ties go to whichever balance comes first in input order.
    active = {b.user_id: b for b in balances if not is_zero_cents(b.amount)}
    out: list[SettlementItem] = []

    while active:
        creditor = debtor = None
        max_credit = max_debit = 0.0
        for b in active.values():
            if b.amount > max_credit:
                max_credit, creditor = b.amount, b
            if b.amount < max_debit:
                max_debit, debtor = b.amount, b

        if creditor is None or debtor is None:
            break

        out.append(_pay(debtor, creditor, min(max_credit, -max_debit)))

        if is_zero_cents(creditor.amount):
            del active[creditor.user_id]
        if is_zero_cents(debtor.amount):
            del active[debtor.user_id]
    return out


# ----- Clustering (medium groups) -----
def clustering(balances: list[Balance], cluster_count: int = CLUSTER_COUNT) -> list[SettlementItem]:
    """
    Split the balances into magnitude bands, settle each band on its own with the
    heuristic, then settle whatever is left across bands.
    """
    ordered = sorted(copy_balances(balances, rounded=True), key=lambda b: abs(b.amount), reverse=True)
    if not ordered:
        return []

    size = math.ceil(len(ordered) / max(cluster_count, 1))
    clusters = [ordered[i:i + size] for i in range(0, len(ordered), size)]

    out: list[SettlementItem] = []
    for cluster in clusters:
        out.extend(heuristic(cluster))

    residual = [b for b in apply_settlements(ordered, out) if not is_zero_cents(b.amount)]
    if residual:
        out.extend(heuristic(residual))
    return out


# ----- Heuristic (large groups) -----
def heuristic(balances: list[Balance]) -> list[SettlementItem]:
    """Exact-match pass, then a two-pointer greedy sweep. O(n log n)."""
    working = copy_balances(balances, rounded=True)
    debtors = sorted((b for b in working if b.amount < 0), key=lambda b: b.amount)
    creditors = sorted((b for b in working if b.amount > 0), key=lambda b: b.amount, reverse=True)

    out: list[SettlementItem] = []
    _exact_matches(debtors, creditors, out)
    _greedy_match(debtors, creditors, out)
    return out


def _exact_matches(debtors: list[Balance], creditors: list[Balance], out: list[SettlementItem]) -> None:
    # Walk both lists from their small-magnitude ends.
    for debtor in reversed(debtors):
        if is_zero_cents(debtor.amount):
            continue
        for creditor in reversed(creditors):
            if is_zero_cents(creditor.amount):
                continue
            if is_zero_cents(creditor.amount + debtor.amount):
                out.append(_pay(debtor, creditor, creditor.amount))
                break


def _greedy_match(debtors: list[Balance], creditors: list[Balance], out: list[SettlementItem]) -> None:
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        if is_zero_cents(debtor.amount):
            i += 1
            continue
        if is_zero_cents(creditor.amount):
            j += 1
            continue

        out.append(_pay(debtor, creditor, min(-debtor.amount, creditor.amount)))

        if is_zero_cents(debtor.amount):
            i += 1
        if is_zero_cents(creditor.amount):
            j += 1


STRATEGIES = {
    Strategy.EXACT_GREEDY: exact_greedy,
    Strategy.CLUSTERING: clustering,
    Strategy.HEURISTIC: heuristic,
}
