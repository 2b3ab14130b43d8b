from app.schemas import SettlementItem
from app.services.money import apply_settlements, copy_balances, is_dust, is_zero_cents, round_cents


def test_round_cents_half_up():
    assert round_cents(10.12567) == 10.13
    assert round_cents(-10.12567) == -10.13
    assert round_cents(0.125) == 0.13
    assert round_cents(-0.125) == -0.12
    assert round_cents(25.5) == 25.5


def test_is_dust():
    assert is_dust(0)
    assert is_dust(0.005)
    assert is_dust(-0.01)
    assert not is_dust(0.02)
    assert not is_dust(-50)


def test_copy_balances_leaves_originals(make_balances):
    balances = make_balances(("A", -10.12567), ("B", 10.12567))
    copies = copy_balances(balances, rounded=True)
    copies[0].amount = 0
    assert balances[0].amount == -10.12567
    assert copies[1].amount == 10.13


def test_apply_settlements(make_balances):
    balances = make_balances(("A", -30), ("B", -20), ("C", 50))
    residual = apply_settlements(balances, [
        SettlementItem(from_user_id="A", to_user_id="C", amount=30),
        SettlementItem(from_user_id="B", to_user_id="C", amount=15),
        SettlementItem(from_user_id="X", to_user_id="C", amount=99),
    ])
    by_id = {b.user_id: b.amount for b in residual}
    assert by_id == {"A": 0, "B": -5, "C": 5}
    assert balances[2].amount == 50


def test_is_zero_cents():
    assert is_zero_cents(0)
    assert is_zero_cents(-0.004)
    assert is_zero_cents(10.1 - 10.1)
    assert not is_zero_cents(10.11 - 10.10)
    assert not is_zero_cents(1.0 - 1.01)
