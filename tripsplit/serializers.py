from decimal import Decimal

from tripsplit.schemas import Balance, Participant, Settlement, Transaction


def _amount(value: Decimal) -> float:
    return float(value)


def serialize_participant(participant: Participant) -> dict:
    return {
        "id": participant.id,
        "name": participant.name,
        "email": participant.email,
        "upiId": participant.upi_id,
    }


def serialize_balance(balance: Balance) -> dict:
    return {
        "userId": balance.participant.id,
        "user": serialize_participant(balance.participant),
        "totalPaid": _amount(balance.total_paid),
        "share": _amount(balance.share),
        "balance": _amount(balance.balance),
    }


def serialize_transaction(transaction: Transaction) -> dict:
    return {
        "from": serialize_participant(transaction.from_participant),
        "to": serialize_participant(transaction.to_participant),
        "amount": _amount(transaction.amount),
    }


def serialize_settlement(settlement: Settlement) -> dict:
    summary = settlement.summary
    return {
        "summary": {
            "totalExpenses": _amount(summary.total_expenses),
            "perPersonShare": _amount(summary.per_person_share),
            "memberCount": summary.member_count,
            "totalTransactions": summary.total_transactions,
        },
        "balances": [serialize_balance(b) for b in settlement.balances],
        "transactions": [serialize_transaction(t) for t in settlement.transactions],
    }
