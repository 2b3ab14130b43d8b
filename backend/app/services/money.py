"""Cent rounding and balance bookkeeping shared by the settlement strategies."""
import math
from typing import Iterable

from app.schemas import Balance, SettlementItem

# Anything at or below one cent counts as settled.
SETTLE_EPSILON = 0.01


def round_cents(amount: float) -> float:
    """Round to cents, halves going toward +infinity (10.125 -> 10.13, -0.125 -> -0.12)."""
    # amount * 100 == 0.49999999999999994 rounds up to 1 here; no cent value lands there.
    return math.floor(amount * 100 + 0.5) / 100


def is_dust(amount: float) -> bool:
    return abs(amount) <= SETTLE_EPSILON


def is_zero_cents(amount: float) -> bool:
    """True when amount is nothing once rounded; 10.11 - 10.10 still counts as a cent."""
    return round_cents(amount) == 0


def copy_balances(balances: Iterable[Balance], rounded: bool = False) -> list[Balance]:
    """Working copies so strategies never mutate the caller's objects."""
    out = []
    for b in balances:
        c = b.model_copy()
        if rounded:
            c.amount = round_cents(c.amount)
        out.append(c)
    return out


def make_settlement(debtor: Balance, creditor: Balance, amount: float) -> SettlementItem:
    return SettlementItem(
        from_user_id=debtor.user_id,
        to_user_id=creditor.user_id,
        amount=round_cents(amount),
        from_profile=debtor.profile,
        to_profile=creditor.profile,
    )


def apply_settlements(
    balances: Iterable[Balance], settlements: Iterable[SettlementItem]
) -> list[Balance]:
    """
    Residual balances after paying every settlement: the payer's amount goes up,
    the payee's goes down. Settlements naming unknown users are skipped.
    """
    result = {b.user_id: b for b in copy_balances(balances)}
    for s in settlements:
        payer = result.get(s.from_user_id)
        payee = result.get(s.to_user_id)
        if payer is None or payee is None:
            continue
        payer.amount += s.amount
        payee.amount -= s.amount
    return list(result.values())
