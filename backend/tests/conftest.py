import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.schemas import Balance, MemberProfile


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_balances():
    """make_balances(("A", -50), ("B", 50)) -> list of Balance with simple profiles."""
    def _make(*pairs):
        return [
            Balance(
                user_id=uid,
                amount=amount,
                profile=MemberProfile(user_id=uid.lower(), name=uid, avatar_url=f"avatar-{uid}"),
            )
            for uid, amount in pairs
        ]
    return _make


@pytest.fixture
def assert_settled():
    """Check that paying every settlement brings each original balance within a cent of zero."""
    def _check(balances, settlements):
        net = {b.user_id: b.amount for b in balances}
        for s in settlements:
            assert s.from_user_id != s.to_user_id
            assert s.amount > 0
            net[s.from_user_id] += s.amount
            net[s.to_user_id] -= s.amount
        for uid, amount in net.items():
            assert abs(amount) < 0.01, f"{uid} left with {amount}"
    return _check
