from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# --- Snapshot supplied by the caller ---

class Participant(BaseModel):
    id: str
    name: str
    upi_id: str | None = None  # payment-routing address, passed through untouched
    email: str | None = None

    model_config = {"frozen": True}


class Expense(BaseModel):
    id: str
    amount: Decimal
    paid_by: str  # participant id
    title: str | None = None
    created_at: datetime | None = None  # display ordering only

    model_config = {"frozen": True}


# --- Derived records ---

class Balance(BaseModel):
    participant: Participant
    total_paid: Decimal
    share: Decimal
    balance: Decimal  # total_paid - share; positive means owed money

    model_config = {"frozen": True}


class Transaction(BaseModel):
    from_participant: Participant
    to_participant: Participant
    amount: Decimal

    model_config = {"frozen": True}


class SettlementSummary(BaseModel):
    total_expenses: Decimal
    per_person_share: Decimal
    member_count: int
    total_transactions: int

    model_config = {"frozen": True}


class Settlement(BaseModel):
    summary: SettlementSummary
    balances: list[Balance]
    transactions: list[Transaction]

    model_config = {"frozen": True}


# --- Request bodies ---

class SettleIn(BaseModel):
    trip_id: str | None = None
    participants: list[Participant]
    expenses: list[Expense] = []


class PaymentLinkIn(BaseModel):
    trip_id: str | None = None
    trip_name: str
    from_participant: Participant = Field(alias="from")
    to: Participant
    amount: Decimal
    transaction_ref: str | None = None

    model_config = {"populate_by_name": True}
