"""Minimize number of transfers so everyone is settled (who owes whom)."""
import logging
import math
from collections import Counter
from typing import Optional

from app.config import MEDIUM_GROUP_MAX_USERS, SMALL_GROUP_MAX_USERS
from app.schemas import Balance, SettlementItem
from app.services.money import is_dust
from app.services.strategies import STRATEGIES, Strategy

logger = logging.getLogger(__name__)


class InvalidBalancesError(ValueError):
    """Input the solver cannot settle: non-finite amounts or repeated user ids."""


def validate_balances(balances: list[Balance]) -> None:
    bad = [b.user_id for b in balances if not math.isfinite(b.amount)]
    if bad:
        raise InvalidBalancesError(f"Non-finite balance for: {', '.join(bad)}")
    dupes = [uid for uid, n in Counter(b.user_id for b in balances).items() if n > 1]
    if dupes:
        raise InvalidBalancesError(f"Duplicate user ids: {', '.join(dupes)}")


def select_strategy(
    participant_count: int,
    small_max: int = SMALL_GROUP_MAX_USERS,
    medium_max: int = MEDIUM_GROUP_MAX_USERS,
) -> Strategy:
    """Smaller households get the more thorough strategy."""
    if participant_count <= small_max:
        return Strategy.EXACT_GREEDY
    if participant_count <= medium_max:
        return Strategy.CLUSTERING
    return Strategy.HEURISTIC


def plan_settlements(balances: list[Balance]) -> tuple[Optional[Strategy], list[SettlementItem]]:
    """
    Like compute_settlements, but also reports which strategy ran.
    The strategy is None when there was nothing to settle.
    """
    validate_balances(balances)
    active = [b for b in balances if not is_dust(b.amount)]
    # A lone balance means the ledger upstream does not add up; nothing to pay.
    if len(active) < 2:
        return None, []

    strategy = select_strategy(len(active))
    logger.debug("Settling %d balances with %s", len(active), strategy.value)
    return strategy, STRATEGIES[strategy](active)


def compute_settlements(balances: list[Balance]) -> list[SettlementItem]:
    """
    balances: one entry per user (positive = is owed money, negative = owes money).
    Returns the transfers that settle everyone up.
    """
    return plan_settlements(balances)[1]
