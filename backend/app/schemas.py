"""Pydantic schemas for request/response."""
from typing import Optional

from pydantic import BaseModel, EmailStr


# ----- Member -----
class MemberProfile(BaseModel):
    """Display data carried through to the settlements; never used in the math."""
    user_id: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    email: Optional[EmailStr] = None

    class Config:
        extra = "allow"


# ----- Balance -----
class Balance(BaseModel):
    user_id: str
    amount: float
    profile: Optional[MemberProfile] = None


# ----- Settlement -----
class SettlementItem(BaseModel):
    from_user_id: str
    to_user_id: str
    amount: float
    from_profile: Optional[MemberProfile] = None
    to_profile: Optional[MemberProfile] = None


class SettleRequest(BaseModel):
    balances: list[Balance]


class SettlementSummary(BaseModel):
    strategy: Optional[str] = None
    participant_count: int
    transaction_count: int
    settlements: list[SettlementItem]


class VerifyRequest(BaseModel):
    balances: list[Balance]
    settlements: list[SettlementItem]


class VerifyResponse(BaseModel):
    settled: bool
    balances: list[Balance]


class ComparisonResponse(BaseModel):
    adaptive: SettlementSummary
    baseline: list[SettlementItem]
    saved_transactions: int


# ----- Benchmark -----
class BenchmarkRow(BaseModel):
    users: int
    strategy: Optional[str] = None
    adaptive_ms: float
    baseline_ms: float
    adaptive_transactions: int
    baseline_transactions: int
