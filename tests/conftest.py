from decimal import Decimal

import pytest

from tripsplit.schemas import Expense, Participant


def make_participants(*names: str) -> list[Participant]:
    return [
        Participant(id=name.lower(), name=name, upi_id=f"{name.lower()}@okbank")
        for name in names
    ]


def make_expense(expense_id: str, paid_by: str, amount: str) -> Expense:
    return Expense(id=expense_id, paid_by=paid_by, amount=Decimal(amount))


@pytest.fixture
def trio():
    """Alice, Bob and Carol."""
    return make_participants("Alice", "Bob", "Carol")


@pytest.fixture
def settle_payload():
    """Snapshot where Alice covered dinner for three."""
    return {
        "trip_id": "goa-2025",
        "participants": [
            {"id": "alice", "name": "Alice", "upi_id": "alice@okbank"},
            {"id": "bob", "name": "Bob", "upi_id": "bob@okbank"},
            {"id": "carol", "name": "Carol", "upi_id": "carol@okbank"},
        ],
        "expenses": [
            {"id": "e1", "title": "Dinner", "amount": "90.00", "paid_by": "alice"},
        ],
    }
